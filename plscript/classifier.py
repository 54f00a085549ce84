from __future__ import annotations

from typing import Mapping, Optional, Union

from .config import DEFAULT_PAST_TENSE
from .splitter import Statement

NO_ROWS_SELECTED = "no rows selected"
PLSQL_COMPLETED = "PL/SQL procedure successfully completed."


class OutcomeClassifier:
    """
    Turn a statement that returned no rows into a SQL*Plus style message.

    한국어 주석: 첫 토큰은 동사, 두 번째 토큰은 대상 종류로 봅니다 (예: DROP TABLE -> "Table dropped.").
    """

    def __init__(self, past_tense: Optional[Mapping[str, str]] = None, fallback: str = "succeeded") -> None:
        table = DEFAULT_PAST_TENSE if past_tense is None else past_tense
        self.past_tense = {verb.upper(): past for verb, past in table.items()}
        self.fallback = fallback

    def classify(self, statement: Union[Statement, str]) -> str:
        tokens = str(statement).split()
        verb = tokens[0].upper() if tokens else ""
        if verb == "SELECT":
            return NO_ROWS_SELECTED
        if verb.startswith(("BEGIN", "DECLARE")):
            return PLSQL_COMPLETED

        past = self.past_tense.get(verb, self.fallback)
        # Single-token statements have no subject to report; "public_synonym" -> "Public_Synonym".
        subject = tokens[1].title() if len(tokens) > 1 else ""
        return f"{subject} {past}.".strip()


_default = OutcomeClassifier()


def classify(statement: Union[Statement, str]) -> str:
    return _default.classify(statement)
