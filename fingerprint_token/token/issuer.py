"""Fingerprint-bound token issuer."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable
from uuid import uuid4

from ..errors import InvalidValidityWindowError
from ..utils.hashing import fingerprint_hash
from ..utils.time import now_ms
from .types import DAY_MS, TOKEN_VERSION, TokenRecord, is_real_number

logger = logging.getLogger(__name__)

DEFAULT_DAYS_VALID = 7


def _window_ms(days_valid: Any) -> int:
    """Return the validity window in milliseconds, rejecting unusable windows."""
    if not is_real_number(days_valid) or days_valid <= 0:
        raise InvalidValidityWindowError(f"days_valid must be a positive finite number, got {days_valid!r}")
    try:
        window = float(days_valid) * DAY_MS
    except OverflowError:
        window = math.inf
    if not math.isfinite(window):
        raise InvalidValidityWindowError(f"days_valid is too large, got {days_valid!r}")
    window_ms = days_valid * DAY_MS if isinstance(days_valid, int) else round(window)
    if window_ms < 1:
        raise InvalidValidityWindowError(f"days_valid is shorter than one millisecond, got {days_valid!r}")
    return window_ms


class TokenIssuer:
    """Issue UUID v4 tokens that expire after a window and carry a fingerprint hash."""

    def __init__(
        self,
        *,
        days_valid: float = DEFAULT_DAYS_VALID,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], Any] = uuid4,
    ) -> None:
        _window_ms(days_valid)
        self.days_valid = days_valid
        self._clock = clock
        self._id_factory = id_factory

    def issue(self, snapshot: Any, days_valid: float | None = None) -> TokenRecord:
        days = self.days_valid if days_valid is None else days_valid
        window_ms = _window_ms(days)

        fp_hash = fingerprint_hash(snapshot)
        token_id = str(self._id_factory())
        issued_at = int(self._clock())
        record = TokenRecord(
            uuid=token_id,
            issued_at=issued_at,
            expires_at=issued_at + window_ms,
            fingerprint_hash=fp_hash,
            days_valid=days,
            version=TOKEN_VERSION,
        )
        logger.debug("issued token %s expiring at %d", record.uuid, record.expires_at)
        return record


_default_issuer = TokenIssuer()


def issue(snapshot: Any, days_valid: float = DEFAULT_DAYS_VALID) -> TokenRecord:
    """Issue a token for ``snapshot`` valid for ``days_valid`` days."""
    return _default_issuer.issue(snapshot, days_valid)
