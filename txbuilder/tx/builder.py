"""
txbuilder.tx.builder
====================

`TransactionBuilder` collects the fields of a transaction, assembles the
canonical `$tx` body, signs it once per signee and returns the envelope:

    {
      "$tx":   { "$contract", "$namespace", "$i", "$entry"?, "$o"?, "$r"? },
      "$sigs": { <stream id>: <signature>, ... },
      "$territoriality"?: <str>,
      "$selfsign"?: "true"
    }

Lifecycle
---------
1) Collect: setters (`namespace`, `contract`, `entry`, `territoriality`,
   `selfsign`) and the built sections (`input`, `output`, `readonly`).
2) `build(signees)`: validates the required fields, builds and caches the body,
   signs its canonical text and caches the envelope. New signatures are merged
   into those already held, overwriting only matching stream ids.
3) `sign(signees)`: adds signatures over the *cached* body text. The body is
   never rebuilt, so every signature covers the bytes first committed to.

Example
-------
    from txbuilder import PacketBuilder, TransactionBuilder, make_signees, packet_value

    data = PacketBuilder(packet_value({"s1": {"a": "b"}})).build()
    tx = TransactionBuilder("ns", "c").input(data).build(make_signees(("s1", key)))

A failed `build` or `sign` leaves previously cached state untouched.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Optional, Tuple, Union

from ..config import DEFAULT, BuilderConfig
from ..errors import (ErrorCode, KeyGenerationError, SigningError,
                      TxBuilderError, TxBuildError)
from ..packet.builder import Input, Output, PacketBuilder, PacketData, Readonly
from ..packet.value import packet_value
from ..utils.canonical import dumps
from ..wallet.keys import Key, KeyType, generate_key
from .body import OPTIONAL_FIELDS, TransactionBody
from .signee import Signees

__all__ = ["TransactionBuilder"]

log = logging.getLogger(__name__)

_REQUIRED = (
    ("contract", ErrorCode.CONTRACT_MISSING),
    ("namespace", ErrorCode.NAMESPACE_MISSING),
    ("input", ErrorCode.INPUT_MISSING),
)
_ENVELOPE_FLAGS = ("territoriality", "selfsign")


class TransactionBuilder:
    def __init__(self, namespace: Optional[str] = None, contract: Optional[str] = None) -> None:
        # Fields of the $tx object: namespace, contract, entry, input, output, readonly
        self._packet_data: Dict[str, Any] = {}
        # Envelope flags: territoriality, selfsign
        self._tx_data: Dict[str, Any] = {}

        self._body: Optional[TransactionBody] = None
        self._tx: Optional[Dict[str, Any]] = None
        self._sigs: Dict[str, str] = {}

        if namespace is not None:
            self.namespace(namespace)
        if contract is not None:
            self.contract(contract)

    @classmethod
    def blank(cls) -> "TransactionBuilder":
        return cls()

    def __repr__(self) -> str:
        state = "built" if self._tx is not None else "collecting"
        return f"TransactionBuilder({state}, sigs={len(self._sigs)})"

    # ---- Reads ----

    def get(self) -> str:
        if self._tx is None:
            raise TxBuildError(ErrorCode.NO_TX_DATA)
        return dumps(self._tx)

    def get_json(self) -> Dict[str, Any]:
        if self._tx is None:
            raise TxBuildError(ErrorCode.NO_TX_DATA)
        return copy.deepcopy(self._tx)

    @property
    def signatures(self) -> Dict[str, str]:
        return dict(self._sigs)

    # ---- Setters ----

    def namespace(self, namespace: str) -> "TransactionBuilder":
        self._packet_data["namespace"] = str(namespace)
        return self

    def contract(self, contract: str) -> "TransactionBuilder":
        self._packet_data["contract"] = str(contract)
        return self

    def entry(self, entry: str) -> "TransactionBuilder":
        self._packet_data["entry"] = str(entry)
        return self

    def territoriality(self, territoriality: str) -> "TransactionBuilder":
        self._tx_data["territoriality"] = str(territoriality)
        return self

    def selfsign(self) -> "TransactionBuilder":
        self._tx_data["selfsign"] = "true"
        return self

    def input(self, input: Input) -> "TransactionBuilder":
        return self._set_section("input", input, ErrorCode.INPUT_NOT_BUILT)

    def output(self, output: Output) -> "TransactionBuilder":
        return self._set_section("output", output, ErrorCode.OUTPUT_NOT_BUILT)

    def readonly(self, readonly: Readonly) -> "TransactionBuilder":
        return self._set_section("readonly", readonly, ErrorCode.READONLY_NOT_BUILT)

    def _set_section(self, name: str, data: PacketData, code: ErrorCode) -> "TransactionBuilder":
        try:
            self._packet_data[name] = data.get()
        except TxBuilderError as e:
            raise TxBuildError(code) from e
        return self

    # ---- Build & sign ----

    def build(self, signees: Signees) -> str:
        """
        Assemble, sign and cache the transaction; return its canonical text.

        Raises TxBuildError if contract, namespace or input is missing, and
        SigningError if any signee fails to sign.
        """
        for name, code in _REQUIRED:
            if name not in self._packet_data:
                raise TxBuildError(code)

        body = TransactionBody(
            self._packet_data["contract"],
            self._packet_data["namespace"],
            self._packet_data["input"],
        )
        for name in OPTIONAL_FIELDS:
            if name in self._packet_data:
                body.add(name, self._packet_data[name])

        tx_json = body.build()
        sigs = _sign_all(body.serialize(), signees)

        merged = {**self._sigs, **sigs}
        envelope: Dict[str, Any] = {"$tx": tx_json, "$sigs": dict(merged)}
        for flag in _ENVELOPE_FLAGS:
            if flag in self._tx_data:
                envelope[f"${flag}"] = self._tx_data[flag]

        self._body = body
        self._sigs = merged
        self._tx = envelope
        log.debug("transaction built: contract=%s namespace=%s sigs=%d",
                  tx_json["$contract"], tx_json["$namespace"], len(merged))
        return dumps(envelope)

    def sign(self, signees: Signees) -> "TransactionBuilder":
        """Add signatures over the previously built body."""
        if self._body is None:
            raise TxBuildError(ErrorCode.NO_PACKET_TO_SIGN)
        if self._tx is None:
            raise TxBuildError(ErrorCode.PACKET_NOT_BUILT)

        added = _sign_all(self._body.serialize(), signees)
        self._sigs.update(added)

        envelope = copy.deepcopy(self._tx)
        envelope["$sigs"] = dict(self._sigs)
        self._tx = envelope
        log.debug("transaction re-signed: +%d sigs, total=%d", len(added), len(self._sigs))
        return self

    # ---- Onboarding ----

    @classmethod
    def onboard_tx(cls, key: Key, *, config: Optional[BuilderConfig] = None) -> str:
        """
        Build a self-signed transaction registering `key` as a new identity.

        The input is {key.name: {"type": <label>, "publicKey": <PEM>}}.
        """
        cfg = config or DEFAULT
        try:
            pem = key.public_pem()
        except Exception as e:
            raise SigningError(ErrorCode.PEM_EXPORT, detail=str(e)) from e

        data = PacketBuilder(
            packet_value({key.name: {"type": key.label, "publicKey": pem}})
        ).build()

        signees = Signees().add_selfsign(key)
        builder = cls(cfg.onboard_namespace, cfg.onboard_contract)
        return builder.selfsign().input(data).build(signees)

    @classmethod
    def generate_onboard_tx(
        cls,
        key_type: Union[str, KeyType],
        name: str,
        *,
        config: Optional[BuilderConfig] = None,
    ) -> Tuple[Key, str]:
        """Generate a new key and return it with its onboarding transaction."""
        kind = KeyType.parse(key_type)
        try:
            key = generate_key(kind, name, config=config)
        except Exception as e:
            code = ErrorCode.EC_GENERATION if kind is KeyType.EC else ErrorCode.RSA_GENERATION
            raise KeyGenerationError(code, detail=str(e)) from e

        return key, cls.onboard_tx(key, config=config)


def _sign_all(payload: str, signees: Signees) -> Dict[str, str]:
    """Sign `payload` once per signee; a repeated stream id keeps the last signature."""
    data = payload.encode("utf-8")
    sigs: Dict[str, str] = {}
    for signee in signees.get():
        if signee.stream_id in sigs:
            log.warning("duplicate signee stream id %r; keeping the later signature", signee.stream_id)
        sigs[signee.stream_id] = _sign_one(data, signee.key)
        log.debug("signed for stream %s (%s)", signee.stream_id, signee.key.label)
    return sigs


def _sign_one(data: bytes, key: Key) -> str:
    try:
        return key.sign(data)
    except Exception as e:
        code = ErrorCode.EC_SIGN if key.kind is KeyType.EC else ErrorCode.RSA_SIGN
        raise SigningError(code, detail=str(e)) from e
