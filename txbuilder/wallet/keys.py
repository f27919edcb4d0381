"""
txbuilder.wallet.keys
=====================

Signing keys for ledger identities, backed by `cryptography`.

Two key variants are supported:

- `EllipticCurveKey` — secp256k1, ECDSA over SHA-256, DER-encoded signature
- `RSAKey`           — RSA, PKCS#1 v1.5 over SHA-256

Both expose the same small surface used by the transaction builder:

    key.name            identity name (used as the stream id when self-signing)
    key.kind            KeyType.EC | KeyType.RSA
    key.label           "secp256k1" | "rsa" (the type name the ledger expects)
    key.sign(data)      -> base64 signature text
    key.public_pem()    -> SubjectPublicKeyInfo PEM text
    key.private_pem()   -> unencrypted PKCS#8 PEM text

Notes
-----
- Exceptions from the crypto backend propagate unchanged; the transaction
  builder maps them to its own error codes.
- Private PEM export is unencrypted. Store it accordingly.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from ..config import DEFAULT, BuilderConfig

__all__ = [
    "KeyType",
    "Key",
    "EllipticCurveKey",
    "RSAKey",
    "generate_key",
    "load_key",
]


class KeyType(str, Enum):
    EC = "ec"
    RSA = "rsa"

    @classmethod
    def parse(cls, value: Union[str, "KeyType"]) -> "KeyType":
        if isinstance(value, KeyType):
            return value
        n = str(value).strip().lower()
        aliases = {"secp256k1": "ec", "elliptic": "ec", "ecdsa": "ec"}
        try:
            return cls(aliases.get(n, n))
        except ValueError:
            raise ValueError(f"Unsupported key type: {value!r}") from None


class Key(ABC):
    """Common base of the two key variants."""

    kind: KeyType
    label: str

    def __init__(self, name: str, private_key) -> None:
        self._name = str(name)
        self._sk = private_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def sign(self, data: bytes) -> str:
        """Sign `data` and return the signature as base64 text."""

    def public_pem(self) -> str:
        pk = self._sk.public_key()
        return pk.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")

    def private_pem(self) -> str:
        return self._sk.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")


class EllipticCurveKey(Key):
    kind = KeyType.EC
    label = "secp256k1"

    @classmethod
    def generate(cls, name: str) -> "EllipticCurveKey":
        return cls(name, ec.generate_private_key(ec.SECP256K1()))

    def sign(self, data: bytes) -> str:
        sig = self._sk.sign(bytes(data), ec.ECDSA(hashes.SHA256()))
        return base64.b64encode(sig).decode("ascii")


class RSAKey(Key):
    kind = KeyType.RSA
    label = "rsa"

    @classmethod
    def generate(
        cls, name: str, *, key_size: int = 2048, public_exponent: int = 65537
    ) -> "RSAKey":
        sk = rsa.generate_private_key(public_exponent=public_exponent, key_size=key_size)
        return cls(name, sk)

    def sign(self, data: bytes) -> str:
        sig = self._sk.sign(bytes(data), padding.PKCS1v15(), hashes.SHA256())
        return base64.b64encode(sig).decode("ascii")


def generate_key(
    kind: Union[str, KeyType], name: str, *, config: Optional[BuilderConfig] = None
) -> Key:
    """Generate a fresh key of the requested kind."""
    cfg = config or DEFAULT
    kind = KeyType.parse(kind)
    if kind is KeyType.EC:
        return EllipticCurveKey.generate(name)
    return RSAKey.generate(
        name, key_size=cfg.rsa_key_size, public_exponent=cfg.rsa_public_exponent
    )


def load_key(name: str, pem: Union[str, bytes]) -> Key:
    """
    Load an unencrypted private key PEM and wrap it in the matching variant.

    Only secp256k1 curve keys and RSA keys are accepted.
    """
    raw = pem.encode("ascii") if isinstance(pem, str) else bytes(pem)
    sk = serialization.load_pem_private_key(raw, password=None)
    if isinstance(sk, ec.EllipticCurvePrivateKey):
        if not isinstance(sk.curve, ec.SECP256K1):
            raise ValueError(f"unsupported curve {sk.curve.name!r}; expected secp256k1")
        return EllipticCurveKey(name, sk)
    if isinstance(sk, rsa.RSAPrivateKey):
        return RSAKey(name, sk)
    raise ValueError(f"unsupported private key type {type(sk).__name__}")
