"""Canonical JSON encoding used to fingerprint puzzle payloads.

Dictionary keys are sorted, tuples become arrays, whitespace is dropped and
the result is UTF-8 encoded, so two equal payloads always produce the same
bytes and the same digest.
"""

from __future__ import annotations

import hashlib
import json
import math
from enum import Enum
from typing import Any

__all__ = ["jcs_dump", "jcs_sha256"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, Enum):
        return _canonicalize(obj.value)
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity cannot be canonicalised")
        if obj.is_integer():
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonical JSON: {type(obj)!r}")


def jcs_dump(obj: Any) -> bytes:
    """Return the canonical UTF-8 bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def jcs_sha256(obj: Any) -> str:
    digest = hashlib.sha256(jcs_dump(obj)).hexdigest()
    return f"sha256-{digest}"
