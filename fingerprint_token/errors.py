"""Exception types raised by fingerprint-token."""

from __future__ import annotations


class FingerprintTokenError(Exception):
    """Base class for all package errors."""


class MalformedSnapshotError(FingerprintTokenError, ValueError):
    """Attribute snapshot cannot be canonically encoded (cycle, bad key, unordered set)."""


class InvalidValidityWindowError(FingerprintTokenError, ValueError):
    """Validity window passed to issuance is not a positive finite number."""


class MalformedTokenError(FingerprintTokenError, ValueError):
    """Serialized token record is missing fields or has fields of the wrong type."""
