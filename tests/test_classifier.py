from __future__ import annotations

import pytest

from plscript.classifier import NO_ROWS_SELECTED, PLSQL_COMPLETED, OutcomeClassifier, classify
from plscript.splitter import Statement, StatementKind


@pytest.mark.parametrize(
    ("stmt", "expected"),
    [
        ("DROP TABLE foo", "Table dropped."),
        ("create index ix_t on t(a)", "Index created."),
        ("Truncate table t", "Table truncated."),
        ("DELETE FROM t WHERE a = 1", "From deleted."),
        ("ALTER SESSION SET nls_date_format = 'YYYY'", "Session altered."),
        ("EXECUTE IMMEDIATE x", "Immediate executed."),
        ("GRANT select ON t TO u", "Select granted."),
        ("FROBNICATE widget", "Widget succeeded."),
        ("SELECT * FROM dual", NO_ROWS_SELECTED),
        ("select\n  a\nfrom t", NO_ROWS_SELECTED),
        ("CREATE public_synonym s FOR t", "Public_Synonym created."),
    ],
)
def test_classify(stmt, expected):
    assert classify(stmt) == expected


def test_blocks_report_plsql_completion():
    assert classify("BEGIN\n  null;\nEND;") == PLSQL_COMPLETED
    assert classify("declare v number; begin null; end;") == PLSQL_COMPLETED
    assert classify("BEGIN;") == PLSQL_COMPLETED


def test_accepts_statement_objects():
    assert classify(Statement("DROP VIEW v", StatementKind.SIMPLE, 0)) == "View dropped."


def test_subject_is_capitalised_not_kept_upper():
    assert classify("DROP SEQUENCE s") == "Sequence dropped."


@pytest.mark.parametrize(("stmt", "expected"), [("COMMIT", "succeeded."), ("TRUNCATE", "truncated."), ("", "succeeded.")])
def test_missing_subject_does_not_crash(stmt, expected):
    assert classify(stmt) == expected


def test_injected_past_tense_table():
    classifier = OutcomeClassifier({"revoke": "revoked"}, fallback="done")
    assert classifier.classify("REVOKE role r FROM u") == "Role revoked."
    assert classifier.classify("DROP TABLE t") == "Table done."
