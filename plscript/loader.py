from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ScriptSourceError(Exception):
    """한국어 주석: 쿼리/파일 인자 조합이 잘못되었거나 파일을 읽을 수 없을 때 사용."""


def load_script(query: Optional[str] = None, path: Optional[str] = None) -> str:
    """
    Return the raw script text from exactly one source: a literal query or a
    file path. The file content is read as UTF-8 and trimmed.

    한국어 주석: 둘 다 주거나 둘 다 없으면 설정 오류로 즉시 실패합니다.
    """
    if query is not None and path is not None:
        raise ScriptSourceError("Give either a query or a file path, not both")
    if query is None and path is None:
        raise ScriptSourceError("Give a query or a file path")
    if query is not None:
        return query

    source_path = Path(path)
    if not source_path.is_file():
        raise ScriptSourceError(f"Script file not found: {source_path}")
    try:
        text = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptSourceError(f"Could not read {source_path}: {exc}") from exc
    logger.debug("loaded %d characters from %s", len(text), source_path)
    return text.strip()
