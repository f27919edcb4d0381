"""
ledger-txbuilder
Build, sign and re-sign ledger transaction envelopes.
"""

from .version import __version__  # noqa: F401

# Config & errors
from .config import BuilderConfig  # noqa: F401
from .errors import (  # noqa: F401
    ErrorCode,
    TxBuilderError,
    BuildError,
    ValueConversionError,
    PacketError,
    TxBodyError,
    TxBuildError,
    KeyGenerationError,
    SigningError,
)

# Packet sections
from .packet import (  # noqa: F401
    PacketValue,
    PacketString,
    PacketArray,
    PacketObject,
    packet_value,
    PacketBuilder,
    PacketData,
)

# Keys
from .wallet import (  # noqa: F401
    KeyType,
    Key,
    EllipticCurveKey,
    RSAKey,
    generate_key,
    load_key,
)

# Transactions
from .tx import (  # noqa: F401
    TransactionBody,
    TransactionBuilder,
    Signee,
    Signees,
    make_signees,
)

__all__ = [
    "__version__",
    # Core
    "BuilderConfig",
    "ErrorCode", "TxBuilderError", "BuildError", "ValueConversionError",
    "PacketError", "TxBodyError", "TxBuildError", "KeyGenerationError", "SigningError",
    # Packet
    "PacketValue", "PacketString", "PacketArray", "PacketObject", "packet_value",
    "PacketBuilder", "PacketData",
    # Keys
    "KeyType", "Key", "EllipticCurveKey", "RSAKey", "generate_key", "load_key",
    # Tx
    "TransactionBody", "TransactionBuilder", "Signee", "Signees", "make_signees",
]
