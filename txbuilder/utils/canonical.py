"""
Deterministic (canonical) JSON text.

The transaction body is signed as text, so every serialization of the same
value must produce the same characters:

- compact separators (no whitespace)
- object keys sorted
- non-ASCII characters kept as UTF-8 (not \\u-escaped)
- NaN / Infinity rejected

API
---
- dumps(obj) -> str
- dumps_bytes(obj) -> bytes (UTF-8 of `dumps`)
- CanonicalEncodeError
"""

from __future__ import annotations

import json
from typing import Any

__all__ = ["CanonicalEncodeError", "dumps", "dumps_bytes"]


class CanonicalEncodeError(ValueError):
    pass


def dumps(obj: Any) -> str:
    """Encode *obj* to canonical JSON text."""
    try:
        return json.dumps(
            obj,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalEncodeError(str(e)) from e


def dumps_bytes(obj: Any) -> bytes:
    return dumps(obj).encode("utf-8")
