"""Utility helpers for canonical hashing and time operations."""

from .hashing import canonical_json, encode, fingerprint_hash, sha256_hex
from .time import now_ms, utc_now

__all__ = ["encode", "canonical_json", "fingerprint_hash", "sha256_hex", "now_ms", "utc_now"]
