"""
Shared pytest fixtures:
- secp256k1 keys (fresh per test)
- one RSA key per session (generation is slow)
- `verify_sig` helper that checks a base64 signature against a key's public PEM
"""
from __future__ import annotations

import base64

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from txbuilder.wallet.keys import EllipticCurveKey, RSAKey


@pytest.fixture
def ec_key() -> EllipticCurveKey:
    return EllipticCurveKey.generate("k")


@pytest.fixture
def ec_key2() -> EllipticCurveKey:
    return EllipticCurveKey.generate("k2")


@pytest.fixture(scope="session")
def rsa_key() -> RSAKey:
    return RSAKey.generate("rk")


def _verify(public_pem: str, payload: bytes, signature_b64: str) -> bool:
    pk = serialization.load_pem_public_key(public_pem.encode("ascii"))
    sig = base64.b64decode(signature_b64)
    try:
        if isinstance(pk, ec.EllipticCurvePublicKey):
            pk.verify(sig, payload, ec.ECDSA(hashes.SHA256()))
        elif isinstance(pk, rsa.RSAPublicKey):
            pk.verify(sig, payload, padding.PKCS1v15(), hashes.SHA256())
        else:  # pragma: no cover
            return False
    except InvalidSignature:
        return False
    return True


@pytest.fixture
def verify_sig():
    """verify_sig(key_or_pem, payload_bytes, signature_b64) -> bool"""

    def _check(key, payload: bytes, signature_b64: str) -> bool:
        pem = key if isinstance(key, str) else key.public_pem()
        return _verify(pem, payload, signature_b64)

    return _check
