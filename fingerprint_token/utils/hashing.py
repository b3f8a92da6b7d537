"""Canonical encoding and fingerprint hashing helpers.

The canonical form is compact JSON with mapping keys sorted by code point.
It differs from ``json.dumps(..., sort_keys=True)`` in three ways that matter
for hashing: non-finite floats are written as quoted strings instead of the
invalid bare ``NaN``/``Infinity`` literals, opaque scalars are quoted via
``str()`` instead of raising, and reference cycles fail fast with
:class:`~fingerprint_token.errors.MalformedSnapshotError`.
"""

from __future__ import annotations

import hashlib
import json
import math
from collections.abc import Mapping, Sequence
from typing import Any, List, Set, Union

from ..errors import MalformedSnapshotError

Value = Union[str, int, float, bool, None, Sequence["Value"], Mapping[str, "Value"]]

_NON_FINITE = {"nan": "NaN", "inf": "Infinity", "-inf": "-Infinity"}
_OPAQUE_SEQUENCES = (str, bytes, bytearray, memoryview)
_CHUNK_DIGITS = 1000
_CHUNK = 10**_CHUNK_DIGITS


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _int_text(value: int) -> str:
    # int.__repr__ so IntEnum members render as numbers
    try:
        return int.__repr__(value)
    except ValueError:
        pass
    # past the interpreter's int-to-str digit limit: convert in fixed-size chunks
    digits = abs(int(value))
    chunks: List[int] = []
    while digits:
        digits, rem = divmod(digits, _CHUNK)
        chunks.append(rem)
    text = str(chunks[-1]) + "".join(str(chunk).zfill(_CHUNK_DIGITS) for chunk in reversed(chunks[:-1]))
    return "-" + text if value < 0 else text


def _write(value: Any, out: List[str], active: Set[int]) -> None:
    if value is None:
        out.append("null")
    elif isinstance(value, bool):
        out.append("true" if value else "false")
    elif isinstance(value, str):
        out.append(_quote(value))
    elif isinstance(value, int):
        out.append(_int_text(value))
    elif isinstance(value, float):
        if math.isfinite(value):
            out.append(float.__repr__(value))
        else:
            out.append(_quote(_NON_FINITE[float.__repr__(value)]))
    elif isinstance(value, Mapping):
        _write_mapping(value, out, active)
    elif isinstance(value, (set, frozenset)):
        raise MalformedSnapshotError("unordered collections cannot be canonically encoded")
    elif isinstance(value, Sequence) and not isinstance(value, _OPAQUE_SEQUENCES):
        _write_sequence(value, out, active)
    else:
        out.append(_quote(str(value)))


def _enter(value: Any, active: Set[int]) -> int:
    marker = id(value)
    if marker in active:
        raise MalformedSnapshotError("snapshot contains a reference cycle")
    active.add(marker)
    return marker


def _write_mapping(value: Mapping[Any, Any], out: List[str], active: Set[int]) -> None:
    marker = _enter(value, active)
    for key in value:
        if not isinstance(key, str):
            raise MalformedSnapshotError(f"mapping keys must be strings, got {type(key).__name__}")
    out.append("{")
    for index, key in enumerate(sorted(value)):
        if index:
            out.append(",")
        out.append(_quote(key))
        out.append(":")
        _write(value[key], out, active)
    out.append("}")
    active.discard(marker)


def _write_sequence(value: Sequence[Any], out: List[str], active: Set[int]) -> None:
    marker = _enter(value, active)
    out.append("[")
    for index, item in enumerate(value):
        if index:
            out.append(",")
        _write(item, out, active)
    out.append("]")
    active.discard(marker)


def canonical_json(snapshot: Value) -> str:
    """Return the canonical text form of an attribute snapshot."""
    out: List[str] = []
    try:
        _write(snapshot, out, set())
    except RecursionError as exc:
        raise MalformedSnapshotError("snapshot is nested too deeply to encode") from exc
    return "".join(out)


def encode(snapshot: Value) -> bytes:
    """Return the canonical UTF-8 encoding of an attribute snapshot."""
    # surrogatepass keeps lone surrogates in str values encodable
    return canonical_json(snapshot).encode("utf-8", "surrogatepass")


def sha256_hex(value: Union[str, bytes]) -> str:
    """Return SHA-256 hex digest for the provided text or bytes."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return hashlib.sha256(value).hexdigest()


def fingerprint_hash(snapshot: Value) -> str:
    """Return the 64-character lowercase hex fingerprint hash of a snapshot."""
    return sha256_hex(encode(snapshot))
