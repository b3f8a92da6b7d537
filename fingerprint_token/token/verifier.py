"""Token verification against expiry and fingerprint binding."""

from __future__ import annotations

import hmac
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from ..errors import MalformedSnapshotError
from ..utils.hashing import fingerprint_hash
from ..utils.time import now_ms
from .types import TokenRecord, VerificationResult, is_real_number

logger = logging.getLogger(__name__)


def _as_payload(token: Any) -> Optional[Dict[str, Any]]:
    if isinstance(token, TokenRecord):
        return token.to_dict()
    if isinstance(token, Mapping):
        return dict(token)
    return None


class TokenVerifier:
    """Check token expiry and, in strict mode, the bound fingerprint hash.

    Passing ``current_snapshot=None`` selects loose mode: only expiry is
    checked. Any other snapshot, including an empty mapping, selects strict
    mode. Verification never raises; every failure is a ``VerificationResult``
    with ``valid=False`` and a reason code.
    """

    def __init__(self, *, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock

    def verify(self, token: Any, current_snapshot: Any = None) -> VerificationResult:
        payload = _as_payload(token)
        if payload is None:
            return self._reject("malformed_token")

        expires_at = payload.get("expiresAt")
        if not is_real_number(expires_at):
            return self._reject("malformed_token", payload)

        if self._clock() >= expires_at:
            return self._reject("token_expired", payload)

        if current_snapshot is not None:
            stored_hash = payload.get("fingerprintHash")
            if not isinstance(stored_hash, str):
                return self._reject("fingerprint_mismatch", payload)
            try:
                current_hash = fingerprint_hash(current_snapshot)
            except MalformedSnapshotError:
                return self._reject("malformed_snapshot", payload)
            if not hmac.compare_digest(current_hash.encode("utf-8"), stored_hash.encode("utf-8", "surrogatepass")):
                return self._reject("fingerprint_mismatch", payload)

        return VerificationResult(True, "ok", payload=payload)

    @staticmethod
    def _reject(reason: str, payload: Optional[Dict[str, Any]] = None) -> VerificationResult:
        token_id = payload.get("uuid") if payload else None
        logger.debug("token %s rejected: %s", token_id, reason)
        return VerificationResult(False, reason, payload=payload)


_default_verifier = TokenVerifier()


def is_valid(token: Any, current_snapshot: Any = None) -> bool:
    """Return True if ``token`` is unexpired and, when a snapshot is given, bound to it."""
    return _default_verifier.verify(token, current_snapshot).valid
