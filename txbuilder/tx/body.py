"""
The `$tx` object: contract, namespace and input, plus optional entry, output
and readonly sections.

    {
      "$contract":  <contract>,
      "$namespace": <namespace>,
      "$i":         <input>,
      "$entry":     <entry>,       # only if set
      "$o":         <output>,      # only if set
      "$r":         <readonly>,    # only if set
    }
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from ..errors import TxBodyError
from ..utils.canonical import dumps

__all__ = ["TransactionBody", "OPTIONAL_FIELDS"]

# builder field name -> $tx key
OPTIONAL_FIELDS = {
    "entry": "$entry",
    "output": "$o",
    "readonly": "$r",
}


class TransactionBody:
    def __init__(self, contract: Any, namespace: Any, input: Any) -> None:
        self.contract = contract
        self.namespace = namespace
        self.input = input
        self._optional: Dict[str, Any] = {}
        self._json: Optional[Dict[str, Any]] = None

    def add(self, key: str, value: Any) -> "TransactionBody":
        if key not in OPTIONAL_FIELDS:
            raise ValueError(f"not an optional transaction field: {key!r}")
        self._optional[key] = value
        return self

    def build(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "$contract": copy.deepcopy(self.contract),
            "$namespace": copy.deepcopy(self.namespace),
            "$i": copy.deepcopy(self.input),
        }
        for name, tx_key in OPTIONAL_FIELDS.items():
            if name in self._optional:
                body[tx_key] = copy.deepcopy(self._optional[name])

        self._json = body
        return copy.deepcopy(body)

    def get(self) -> Dict[str, Any]:
        if self._json is None:
            raise TxBodyError()
        return copy.deepcopy(self._json)

    def serialize(self) -> str:
        """Canonical text of the built body; these are the bytes that get signed."""
        if self._json is None:
            raise TxBodyError()
        return dumps(self._json)
