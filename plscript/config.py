from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv


DEFAULT_DIRECTIVE_PREFIXES: Tuple[str, ...] = ("SET", "PROMPT", "COLUMN", "COMPUTE", "REM")
DEFAULT_BLOCK_KEYWORDS: Tuple[str, ...] = ("DECLARE", "BEGIN")

DEFAULT_PAST_TENSE: Dict[str, str] = {
    "DROP": "dropped",
    "CREATE": "created",
    "TRUNCATE": "truncated",
    "DELETE": "deleted",
    "ALTER": "altered",
    "EXECUTE": "executed",
    "GRANT": "granted",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """한국어 주석: 환경 설정 값이 잘못된 경우 사용."""


@dataclass(frozen=True)
class SplitterConfig:
    """
    Keyword sets used by the segmenter.

    한국어 주석: 지시어 접두어와 블록 시작 키워드는 주입 가능한 설정으로 둡니다.
    """

    directive_prefixes: Tuple[str, ...] = DEFAULT_DIRECTIVE_PREFIXES
    block_keywords: Tuple[str, ...] = DEFAULT_BLOCK_KEYWORDS
    # Only drop directives where a statement may start (keeps "UPDATE t\nSET a = 1").
    directive_boundary_only: bool = False


@dataclass
class Settings:
    splitter: SplitterConfig = field(default_factory=SplitterConfig)
    stop_on_error: bool = False
    log_level: str = "WARNING"
    dsn: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None


def parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {value!r}")


def parse_prefixes(value: str) -> Tuple[str, ...]:
    prefixes = tuple(p.strip().upper() for p in value.split(",") if p.strip())
    if not prefixes:
        raise ConfigError("PLSCRIPT_DIRECTIVES must name at least one prefix")
    return prefixes


def load_settings(env: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables (after loading a .env file).

    Recognised variables: PLSCRIPT_DIRECTIVES, PLSCRIPT_DIRECTIVE_BOUNDARY_ONLY,
    PLSCRIPT_STOP_ON_ERROR, PLSCRIPT_LOG_LEVEL, ORACLE_DSN, ORACLE_USER, ORACLE_PASSWORD.

    한국어 주석: env 인자를 주면 .env 로딩 없이 해당 매핑만 사용합니다 (테스트용).
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    raw_prefixes = env.get("PLSCRIPT_DIRECTIVES")
    splitter = SplitterConfig(
        directive_prefixes=DEFAULT_DIRECTIVE_PREFIXES if raw_prefixes is None else parse_prefixes(raw_prefixes),
        directive_boundary_only=parse_bool(
            env.get("PLSCRIPT_DIRECTIVE_BOUNDARY_ONLY", "0"), "PLSCRIPT_DIRECTIVE_BOUNDARY_ONLY"
        ),
    )

    return Settings(
        splitter=splitter,
        stop_on_error=parse_bool(env.get("PLSCRIPT_STOP_ON_ERROR", "0"), "PLSCRIPT_STOP_ON_ERROR"),
        log_level=env.get("PLSCRIPT_LOG_LEVEL", "WARNING").upper(),
        dsn=env.get("ORACLE_DSN") or None,
        user=env.get("ORACLE_USER") or None,
        password=env.get("ORACLE_PASSWORD") or None,
    )
