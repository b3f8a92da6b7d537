"""Fingerprint-token package.

Issue short-lived UUID v4 tokens bound to a SHA-256 hash of a client
fingerprint, and validate them against expiry and the presenting context.
"""

from .errors import FingerprintTokenError, InvalidValidityWindowError, MalformedSnapshotError, MalformedTokenError
from .token import TokenIssuer, TokenRecord, TokenVerifier, VerificationResult, is_valid, issue
from .utils.hashing import canonical_json, encode, fingerprint_hash

__all__ = [
    "encode",
    "canonical_json",
    "fingerprint_hash",
    "issue",
    "is_valid",
    "TokenIssuer",
    "TokenVerifier",
    "TokenRecord",
    "VerificationResult",
    "FingerprintTokenError",
    "InvalidValidityWindowError",
    "MalformedSnapshotError",
    "MalformedTokenError",
]
