"""
txbuilder.wallet
================

Convenience exports for signing keys (secp256k1 / RSA).
"""

from .keys import (EllipticCurveKey, Key, KeyType, RSAKey, generate_key,
                   load_key)

__all__ = [
    "KeyType",
    "Key",
    "EllipticCurveKey",
    "RSAKey",
    "generate_key",
    "load_key",
]
