"""UTC time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Return milliseconds since the Unix epoch."""
    return int(utc_now().timestamp() * 1000)
