"""
txbuilder.tx
============

Transaction assembly and signing.

Submodules
----------
- body    : the `$tx` object (contract / namespace / input / optional sections)
- signee  : ordered (stream id, key) registry
- builder : `TransactionBuilder` — field collection, build, re-sign, onboarding
"""

from .body import TransactionBody
from .builder import TransactionBuilder
from .signee import Signee, Signees, make_signees

__all__ = [
    "TransactionBody",
    "TransactionBuilder",
    "Signee",
    "Signees",
    "make_signees",
]
