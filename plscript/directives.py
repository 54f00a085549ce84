from __future__ import annotations

from typing import Iterable

from .config import DEFAULT_DIRECTIVE_PREFIXES


def is_directive(line: str, prefixes: Iterable[str] = DEFAULT_DIRECTIVE_PREFIXES) -> bool:
    """
    Return True if the trimmed line starts with one of the client directive
    prefixes (SET, PROMPT, ...), case-insensitively. REMARK counts as REM.

    한국어 주석: SERVEROUTPUT 같은 SQL*Plus 지시어 줄인지 판별합니다.
    """
    upper = line.strip().upper()
    if not upper:
        return False
    return upper.startswith(tuple(p.upper() for p in prefixes))


def strip_directives(
    sql_text: str,
    prefixes: Iterable[str] = DEFAULT_DIRECTIVE_PREFIXES,
    boundary_only: bool = False,
) -> str:
    """
    Remove every client directive line while keeping every other line and its
    original line break, since a lone "/" terminator depends on line structure.

    With boundary_only, a directive is only recognised where a new statement
    may start (beginning of text, or after a line ending with ";" or a lone
    "/"), which keeps the SET clause of a multi-line UPDATE.

    한국어 주석: 지시어 줄은 분할 전에 제거합니다. 줄바꿈 문자는 원문 그대로 유지합니다.
    """
    prefixes = tuple(prefixes)
    out_lines: list[str] = []
    at_boundary = True
    for raw in sql_text.splitlines(keepends=True):
        line = raw.strip()
        if (at_boundary or not boundary_only) and is_directive(line, prefixes):
            continue
        out_lines.append(raw)
        if line:
            at_boundary = line.endswith(";") or line == "/"
    return "".join(out_lines)
