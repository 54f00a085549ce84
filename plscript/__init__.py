from .classifier import OutcomeClassifier, classify
from .config import SplitterConfig
from .splitter import Statement, StatementKind, StatementSplitter, split_sql_statements, split_statements

__all__ = [
    "OutcomeClassifier",
    "Statement",
    "StatementKind",
    "StatementSplitter",
    "SplitterConfig",
    "classify",
    "split_sql_statements",
    "split_statements",
]
