"""
Content hashing helpers.

Stable identifiers derived from JSON-serializable values. Pydantic models are
dumped in JSON mode first, then every value is serialized with sorted keys and
compact separators so that equal content always yields equal digests.
"""

import hashlib
import json
from typing import Any

from pydantic import BaseModel


def _canonical(value: Any) -> bytes:
    """Serialize a value to canonical JSON bytes."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_default,
    ).encode("utf-8")


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not hashable content")


def encode(value: Any) -> str:
    """
    Return a stable hex identifier for a JSON-serializable value.

    Args:
        value: Any JSON-serializable value; pydantic models are allowed at any depth.

    Returns:
        A 64-character sha256 hex digest.
    """
    return hashlib.sha256(_canonical(value)).hexdigest()


def seed(value: Any) -> int:
    """Return a non-negative 31-bit integer derived from a value's content."""
    digest = hashlib.sha256(_canonical(value)).digest()
    return int.from_bytes(digest[:4], "big") & 0x7FFFFFFF


def id(*parts: str) -> str:  # noqa: A001
    """
    Return a hex identifier for an ordered sequence of strings.

    Parts are separated by a NUL byte so ("ab", "c") and ("a", "bc") differ.
    """
    digest = hashlib.sha256()
    for i, part in enumerate(parts):
        if i > 0:
            digest.update(b"\x00")
        digest.update(part.encode("utf-8"))
    return digest.hexdigest()
