"""
Typed error classes for the transaction builder.

Every failure the builder can report is one of the dataclasses below. They all
derive from `TxBuilderError` and carry a numeric `code` from `ErrorCode`, so
callers can either catch a specific family (e.g. `TxBuildError`) or branch on
the exact code.

Code ranges
-----------
  1000  packet build
  2000  value → JSON conversion
  3000  packet data access
  4000  transaction body access
  5000  transaction builder state
  6000  key generation
  7000  signing / key material
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

__all__ = [
    "ErrorCode",
    "TxBuilderError",
    "BuildError",
    "ValueConversionError",
    "PacketError",
    "TxBodyError",
    "TxBuildError",
    "KeyGenerationError",
    "SigningError",
    "describe",
]


class ErrorCode(IntEnum):
    BUILD = 1000

    ARRAY_CONVERSION = 2000
    OBJECT_CONVERSION = 2001

    PACKET_STRING = 3000
    PACKET_JSON = 3001

    NO_TX_BODY = 4000

    NO_TX_DATA = 5000
    INPUT_NOT_BUILT = 5001
    OUTPUT_NOT_BUILT = 5002
    READONLY_NOT_BUILT = 5003
    NO_PACKET_TO_SIGN = 5004
    PACKET_NOT_BUILT = 5005
    CONTRACT_MISSING = 5006
    NAMESPACE_MISSING = 5007
    INPUT_MISSING = 5008

    RSA_GENERATION = 6000
    EC_GENERATION = 6001

    EC_SIGN = 7000
    RSA_SIGN = 7001
    PEM_EXPORT = 7002


_MESSAGES = {
    ErrorCode.BUILD: "Error building the transaction packet",
    ErrorCode.ARRAY_CONVERSION: "Error converting array to JSON",
    ErrorCode.OBJECT_CONVERSION: "Error converting object to JSON",
    ErrorCode.PACKET_STRING: "Error getting string from packet data",
    ErrorCode.PACKET_JSON: "Error getting JSON from packet data",
    ErrorCode.NO_TX_BODY: "No transaction body",
    ErrorCode.NO_TX_DATA: "No transaction data",
    ErrorCode.INPUT_NOT_BUILT: "Error fetching input from PacketData",
    ErrorCode.OUTPUT_NOT_BUILT: "Error fetching output from PacketData",
    ErrorCode.READONLY_NOT_BUILT: "Error fetching readonly from PacketData",
    ErrorCode.NO_PACKET_TO_SIGN: "No packet data to sign",
    ErrorCode.PACKET_NOT_BUILT: "Packet data not built yet",
    ErrorCode.CONTRACT_MISSING: "Contract not set",
    ErrorCode.NAMESPACE_MISSING: "Namespace not set",
    ErrorCode.INPUT_MISSING: "Input not set",
    ErrorCode.RSA_GENERATION: "Error generating RSA key",
    ErrorCode.EC_GENERATION: "Error generating Elliptic Curve key",
    ErrorCode.EC_SIGN: "Error signing data with Elliptic Curve key",
    ErrorCode.RSA_SIGN: "Error signing data with RSA key",
    ErrorCode.PEM_EXPORT: "Error getting keys PEM",
}


def describe(code: int) -> str:
    """Human-readable text for a numeric error code."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except (ValueError, KeyError):
        return "Unknown Error"


class TxBuilderError(Exception):
    """Base class for all transaction builder errors."""


@dataclass(slots=True)
class _CodedError(TxBuilderError):
    code: ErrorCode
    detail: Optional[str] = field(default=None)

    @property
    def message(self) -> str:
        return describe(self.code)

    def __str__(self) -> str:
        text = f"{type(self).__name__}[{int(self.code)}]: {self.message}"
        if self.detail:
            text += f" ({self.detail})"
        return text


@dataclass(slots=True)
class BuildError(_CodedError):
    """Raised when a packet cannot be built (e.g. the root is not an object)."""

    code: ErrorCode = ErrorCode.BUILD


@dataclass(slots=True)
class ValueConversionError(_CodedError):
    """
    Raised when a PacketValue tree cannot be turned into JSON.

    `code` tells whether the failing node sat inside an array
    (ARRAY_CONVERSION) or an object (OBJECT_CONVERSION).
    """


@dataclass(slots=True)
class PacketError(_CodedError):
    """Raised when PacketData is queried before it has been built."""


@dataclass(slots=True)
class TxBodyError(_CodedError):
    code: ErrorCode = ErrorCode.NO_TX_BODY


@dataclass(slots=True)
class TxBuildError(_CodedError):
    """
    Raised for TransactionBuilder state violations: unbuilt sections, missing
    required fields, or signing/reading before a build.
    """


@dataclass(slots=True)
class KeyGenerationError(_CodedError):
    pass


@dataclass(slots=True)
class SigningError(_CodedError):
    """Raised when a signature or the public PEM cannot be produced."""
