"""Environment-driven configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .token.issuer import DEFAULT_DAYS_VALID

DEFAULT_STORE_PATH = "uuid_store.json"


def _number_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    return int(value) if value.is_integer() else value


def _level_env(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


@dataclass
class TokenConfig:
    """Settings for the command surface and store selection."""

    days_valid: float = DEFAULT_DAYS_VALID
    store_path: str = DEFAULT_STORE_PATH
    dsn: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "TokenConfig":
        return cls(
            days_valid=_number_env("FINGERPRINT_TOKEN_DAYS_VALID", DEFAULT_DAYS_VALID),
            store_path=os.getenv("FINGERPRINT_TOKEN_STORE", DEFAULT_STORE_PATH),
            dsn=os.getenv("FINGERPRINT_TOKEN_PG_DSN") or os.getenv("DATABASE_URL"),
            log_level=_level_env("FINGERPRINT_TOKEN_LOG_LEVEL", "WARNING"),
        )
