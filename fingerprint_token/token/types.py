"""Token record datatypes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..errors import MalformedTokenError

DAY_MS = 24 * 60 * 60 * 1000
TOKEN_VERSION = 1


def is_real_number(value: Any) -> bool:
    """Return True for finite ints/floats, excluding bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


@dataclass(frozen=True)
class TokenRecord:
    """Issued credential bound to a fingerprint hash.

    ``to_dict``/``from_dict`` use the camelCase wire field names shared with
    external stores and transports.
    """

    uuid: str
    issued_at: int
    expires_at: int
    fingerprint_hash: str
    days_valid: float
    version: int = TOKEN_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uuid": self.uuid,
            "issuedAt": self.issued_at,
            "expiresAt": self.expires_at,
            "fingerprintHash": self.fingerprint_hash,
            "daysValid": self.days_valid,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenRecord":
        """Build a record from its wire form, raising ``MalformedTokenError`` on bad input."""
        if not isinstance(data, Mapping):
            raise MalformedTokenError(f"token must be an object, got {type(data).__name__}")

        missing = [k for k in ("uuid", "issuedAt", "expiresAt", "fingerprintHash", "daysValid", "version") if k not in data]
        if missing:
            raise MalformedTokenError(f"token is missing fields: {', '.join(missing)}")

        for key in ("uuid", "fingerprintHash"):
            if not isinstance(data[key], str):
                raise MalformedTokenError(f"{key} must be a string")
        for key in ("issuedAt", "expiresAt", "daysValid"):
            if not is_real_number(data[key]):
                raise MalformedTokenError(f"{key} must be a finite number")
        for key in ("issuedAt", "expiresAt"):
            if isinstance(data[key], float) and not data[key].is_integer():
                raise MalformedTokenError(f"{key} must be a whole number of milliseconds")
        if isinstance(data["version"], bool) or not isinstance(data["version"], int):
            raise MalformedTokenError("version must be an integer")

        return cls(
            uuid=data["uuid"],
            issued_at=int(data["issuedAt"]),
            expires_at=int(data["expiresAt"]),
            fingerprint_hash=data["fingerprintHash"],
            days_valid=data["daysValid"],
            version=data["version"],
        )


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: str
    payload: Optional[Dict[str, Any]] = None
