from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .config import SplitterConfig
from .directives import strip_directives

logger = logging.getLogger(__name__)

_NORMAL = "normal"
_IN_QUOTE = "in_quote"
_IN_BLOCK = "in_block"

_END_RE = re.compile(r"END[ \t]*;", re.IGNORECASE)


class StatementKind(str, Enum):
    SIMPLE = "Simple"
    BLOCK = "Block"


@dataclass(frozen=True)
class Statement:
    """One executable unit of script text and where it started in the source."""

    text: str
    kind: StatementKind = StatementKind.SIMPLE
    offset: int = 0

    @property
    def is_block(self) -> bool:
        return self.kind is StatementKind.BLOCK

    def __str__(self) -> str:
        return self.text


def _ident_before(text: str, i: int) -> bool:
    if i == 0:
        return False
    prev = text[i - 1]
    return prev.isalnum() or prev in "_$#"


def _clean(chunk: str, kind: StatementKind) -> str:
    stmt = chunk.strip()
    if stmt.endswith("/"):
        stmt = stmt[:-1].rstrip()
    # A block keeps its closing "END;", which PL/SQL needs.
    if kind is StatementKind.SIMPLE and stmt.endswith(";"):
        stmt = stmt[:-1].rstrip()
    return stmt


class StatementSplitter:
    """
    Split a SQL*Plus style script into statements.

    Terminators are ";" outside single quotes and a line holding only "/".
    DECLARE/BEGIN starts an opaque block that runs to the first "END;" or
    lone "/" line; blocks do not nest. Quote tracking is plain parity
    counting, so '' inside a literal simply toggles twice.

    한국어 주석: 문자열/블록 내부의 세미콜론은 분할하지 않습니다. 문법 검증은 하지 않습니다.
    """

    def __init__(self, config: Optional[SplitterConfig] = None) -> None:
        self.config = config or SplitterConfig()
        keywords = "|".join(re.escape(k) for k in self.config.block_keywords)
        self._block_re = re.compile(rf"(?:{keywords})(?![\w$#])", re.IGNORECASE)

    def split(self, raw_text: str) -> List[Statement]:
        text = strip_directives(
            raw_text or "",
            self.config.directive_prefixes,
            boundary_only=self.config.directive_boundary_only,
        )
        statements: List[Statement] = []
        state = _NORMAL
        block_quote = False
        start: Optional[int] = None

        def emit(end: int, kind: StatementKind) -> None:
            nonlocal start
            if start is not None:
                stmt = _clean(text[start:end], kind)
                if stmt:
                    statements.append(Statement(stmt, kind, start))
            start = None

        pos = 0
        for line in text.splitlines(keepends=True):
            line_start, pos = pos, pos + len(line)
            if line.strip() == "/":
                emit(line_start, StatementKind.BLOCK if state == _IN_BLOCK else StatementKind.SIMPLE)
                state = _NORMAL
                block_quote = False
                continue

            i = line_start
            while i < pos:
                ch = text[i]
                if state == _IN_BLOCK:
                    if ch == "'":
                        block_quote = not block_quote
                    elif not block_quote and ch in "eE" and not _ident_before(text, i):
                        m = _END_RE.match(text, i)
                        if m:
                            emit(m.end(), StatementKind.BLOCK)
                            state = _NORMAL
                            i = m.end()
                            continue
                    i += 1
                    continue

                if state == _IN_QUOTE:
                    if ch == "'":
                        state = _NORMAL
                    i += 1
                    continue

                if start is None and not ch.isspace():
                    start = i
                if ch == "'":
                    state = _IN_QUOTE
                elif ch == ";":
                    emit(i, StatementKind.SIMPLE)
                elif ch.isalpha() and not _ident_before(text, i):
                    m = self._block_re.match(text, i)
                    if m:
                        # Text already pending (e.g. CREATE PROCEDURE p AS) becomes the block head.
                        # A ";" before the keyword (AS v NUMBER; BEGIN) has already cut it off.
                        state = _IN_BLOCK
                        block_quote = False
                        i = m.end()
                        continue
                i += 1

        # Unterminated tail; an open block swallows the remainder.
        emit(len(text), StatementKind.BLOCK if state == _IN_BLOCK else StatementKind.SIMPLE)

        logger.debug(
            "split script into %d statements (%d blocks)",
            len(statements),
            sum(1 for s in statements if s.is_block),
        )
        return statements


def split_statements(raw_text: str, config: Optional[SplitterConfig] = None) -> List[Statement]:
    return StatementSplitter(config).split(raw_text)


def split_sql_statements(sql_text: str) -> List[str]:
    """
    Split SQL text into statement strings in source order.

    한국어 주석: 종류 태그 없이 문장 텍스트만 필요할 때 사용합니다.
    """
    return [stmt.text for stmt in split_statements(sql_text)]
