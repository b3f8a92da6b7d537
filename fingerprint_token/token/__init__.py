"""Fingerprint-bound token issuance and verification."""

from .issuer import DEFAULT_DAYS_VALID, TokenIssuer, issue
from .types import DAY_MS, TOKEN_VERSION, TokenRecord, VerificationResult
from .verifier import TokenVerifier, is_valid

__all__ = [
    "TokenIssuer",
    "TokenVerifier",
    "TokenRecord",
    "VerificationResult",
    "issue",
    "is_valid",
    "DAY_MS",
    "DEFAULT_DAYS_VALID",
    "TOKEN_VERSION",
]
