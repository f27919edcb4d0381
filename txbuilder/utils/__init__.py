"""
Utility helpers for the transaction builder.

Re-exports:
- canonical: deterministic JSON text used for signing
"""

from .canonical import CanonicalEncodeError, dumps, dumps_bytes

__all__ = [
    "CanonicalEncodeError",
    "dumps",
    "dumps_bytes",
]
