"""Environment-driven settings."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    database_path: Optional[str]
    db_timeout: float
    log_level: str
    user: Optional[str]
    identifier_attempts: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_number(name: str, default: float) -> float:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{raw}'")


def load_settings() -> Settings:
    return Settings(
        database_path=_getenv("LETTERDESK_DB_PATH") or None,
        db_timeout=_getenv_number("LETTERDESK_DB_TIMEOUT", 15.0),
        log_level=_getenv("LETTERDESK_LOG_LEVEL", "WARNING").upper(),
        user=_getenv("LETTERDESK_USER") or None,
        identifier_attempts=max(1, int(_getenv_number("LETTERDESK_IDENTIFIER_ATTEMPTS", 10))),
    )
