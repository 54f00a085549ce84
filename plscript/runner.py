from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .classifier import OutcomeClassifier
from .splitter import Statement

logger = logging.getLogger(__name__)

# Messages that mean the session is gone; running further statements is pointless.
DEFAULT_CONNECTION_ERROR_MARKERS: Tuple[str, ...] = (
    "ORA-03113",
    "ORA-03114",
    "ORA-03135",
    "ORA-12514",
    "ORA-12541",
    "ORA-12170",
    "ORA-01012",
    "DPI-1080",
    "DPY-4011",
)


@dataclass
class StatementResult:
    statement: Statement
    columns: List[str] = field(default_factory=list)
    rows: List[Tuple[Any, ...]] = field(default_factory=list)
    message: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScriptRunner:
    """
    Execute statements in order on a DB-API 2 connection.

    The connection is owned by the caller. Statements never run in parallel
    because later DDL/DML may depend on earlier ones.

    한국어 주석: 오류는 결과에 기록하고, stop_on_error 또는 연결 계열 오류일 때 중단합니다.
    """

    def __init__(
        self,
        connection: Any,
        classifier: Optional[OutcomeClassifier] = None,
        stop_on_error: bool = False,
        connection_error_markers: Sequence[str] = DEFAULT_CONNECTION_ERROR_MARKERS,
    ) -> None:
        self.connection = connection
        self.classifier = classifier or OutcomeClassifier()
        self.stop_on_error = stop_on_error
        self.connection_error_markers = tuple(connection_error_markers)

    def is_connection_error(self, message: str) -> bool:
        upper = message.upper()
        return any(marker.upper() in upper for marker in self.connection_error_markers)

    def execute(self, statement: Statement) -> StatementResult:
        result = StatementResult(statement=statement)
        try:
            cursor = self.connection.cursor()
        except Exception as exc:  # noqa: BLE001 - a dead session fails here before execute
            result.error = str(exc).strip() or exc.__class__.__name__
            return result
        try:
            cursor.execute(statement.text)
            if cursor.description:
                result.columns = [col[0] for col in cursor.description]
                result.rows = [tuple(row) for row in cursor.fetchall()]
            if not result.rows:
                result.message = self.classifier.classify(statement)
        except Exception as exc:  # noqa: BLE001 - driver errors vary per DB-API module
            result.error = str(exc).strip() or exc.__class__.__name__
        finally:
            cursor.close()
        return result

    def run(self, statements: Iterable[Statement]) -> List[StatementResult]:
        results: List[StatementResult] = []
        for idx, stmt in enumerate(statements, start=1):
            logger.info("executing statement %d (%s)", idx, stmt.kind.value)
            result = self.execute(stmt)
            results.append(result)
            if result.ok:
                continue
            logger.warning("statement %d failed: %s", idx, result.error)
            if self.is_connection_error(result.error or ""):
                logger.warning("connection lost, skipping remaining statements")
                break
            if self.stop_on_error:
                break
        return results


def _format_outcome(result: StatementResult) -> str:
    if result.error is not None:
        return f"ERROR: {result.error}"
    if result.rows:
        lines = ["\t".join(result.columns)]
        lines.extend("\t".join("" if v is None else str(v) for v in row) for row in result.rows)
        return "\n".join(lines)
    return result.message or ""


def format_results(results: Sequence[StatementResult]) -> str:
    """
    Render outcomes for display. A single statement gets its bare outcome;
    several statements are each shown under their own text.

    한국어 주석: 문장이 여러 개일 때만 원문과 함께 감쌉니다.
    """
    if len(results) == 1:
        return _format_outcome(results[0])
    blocks: List[str] = []
    for result in results:
        blocks.append(f"{result.statement.text}\n--\n{_format_outcome(result)}")
    return "\n\n".join(blocks)
