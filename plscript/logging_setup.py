from __future__ import annotations

import logging
import sys

from .config import ConfigError

_HANDLER_NAME = "plscript-stderr"


def setup_logging(level: str = "WARNING") -> None:
    """
    Attach a single stderr handler to the "plscript" logger.

    한국어 주석: 알 수 없는 레벨 이름은 설정 오류로 처리합니다.
    """
    level_name = level.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ConfigError(f"Unknown log level: {level!r}")

    logger = logging.getLogger("plscript")
    logger.setLevel(level_name)
    for existing in logger.handlers:
        if existing.get_name() == _HANDLER_NAME:
            # Follow the current stderr (click test runners swap it).
            existing.stream = sys.stderr
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
