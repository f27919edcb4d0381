"""
txbuilder.packet.builder
========================

Normalizes one packet section into `PacketData`: a parsed JSON tree plus its
canonical serialized string.

Two sources are accepted and produce the same downstream type:

- a `PacketValue` tree (`PacketBuilder(value)`), converted recursively;
- an arbitrary JSON-compatible value (`PacketBuilder.from_json(obj)`), taken
  as-is. Use this when a section needs numbers, booleans or null.

Example
-------
    from txbuilder.packet import PacketBuilder, packet_value

    data = PacketBuilder(packet_value({"s1": {"a": "b"}})).build()
    data.get()          # {'s1': {'a': 'b'}}
    data.get_string()   # '{"s1":{"a":"b"}}'
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import (BuildError, ErrorCode, PacketError,
                      ValueConversionError)
from ..utils.canonical import CanonicalEncodeError, dumps
from .value import PacketArray, PacketObject, PacketString, PacketValue

__all__ = ["PacketBuilder", "PacketData", "Input", "Output", "Readonly"]

log = logging.getLogger(__name__)

Json = Any


class PacketData:
    """
    Result of building one packet section.

    Holds either the source value tree or pre-supplied JSON, the JSON form and
    the serialized snapshot once `PacketBuilder.build` has run.
    """

    __slots__ = ("_value", "_json", "_is_json", "_built")

    def __init__(self) -> None:
        self._value: Optional[PacketValue] = None
        self._json: Optional[Json] = None
        self._is_json = False
        self._built: Optional[str] = None

    def __repr__(self) -> str:
        state = "built" if self.is_built else "unbuilt"
        source = "json" if self._is_json else "value"
        return f"PacketData({source}, {state})"

    @property
    def is_json(self) -> bool:
        return self._is_json

    @property
    def is_built(self) -> bool:
        return self._built is not None

    def get(self) -> Json:
        """Return the JSON form (a copy). Requires a build."""
        if self._built is None:
            raise PacketError(ErrorCode.PACKET_JSON)
        return copy.deepcopy(self._json)

    def get_string(self) -> str:
        """Return the canonical serialized form. Requires a build."""
        if self._built is None:
            raise PacketError(ErrorCode.PACKET_STRING)
        return self._built

    # ---- population (used by PacketBuilder) ----

    def _set_value(self, value: PacketValue) -> None:
        self._value = value

    def _set_json(self, obj: Json) -> None:
        self._json = obj
        self._is_json = True

    def _set_built(self, obj: Json, text: str) -> None:
        self._json = obj
        self._built = text


Input = PacketData
Output = PacketData
Readonly = PacketData


class PacketBuilder:
    def __init__(self, value: PacketValue) -> None:
        self._data = PacketData()
        # Only object roots can be built; anything else is kept and rejected by build().
        self._data._set_value(value)

    @classmethod
    def from_json(cls, obj: Json) -> "PacketBuilder":
        """Wrap an existing JSON-compatible value, bypassing the value model."""
        builder = cls.__new__(cls)
        builder._data = PacketData()
        builder._data._set_json(copy.deepcopy(obj))
        return builder

    @staticmethod
    def from_string(text: str) -> PacketString:
        return PacketString(str(text))

    def build(self) -> PacketData:
        """
        Finalize the section and return an independent `PacketData` snapshot.

        Raises BuildError if the value root is not an object (or external JSON
        is not serializable), ValueConversionError for malformed nodes.
        """
        data = self._data
        if data.is_json and data._value is None:
            obj = data._json
        else:
            root = data._value
            if not isinstance(root, PacketObject):
                raise BuildError(detail="object required to build")
            obj = _object_to_json(root)

        try:
            text = dumps(obj)
        except CanonicalEncodeError as e:
            raise BuildError(detail=str(e)) from e

        data._set_built(obj, text)
        log.debug("packet built (%d bytes)", len(text))
        return copy.deepcopy(data)


# -----------------------------------------------------------------------------
# PacketValue → JSON
# -----------------------------------------------------------------------------


def _node_to_json(node: Any, container: ErrorCode) -> Json:
    if isinstance(node, PacketString):
        if not isinstance(node.text, str):
            raise ValueConversionError(container, detail="string node holds a non-str")
        return node.text
    if isinstance(node, PacketArray):
        return _array_to_json(node)
    if isinstance(node, PacketObject):
        return _object_to_json(node)
    raise ValueConversionError(container, detail=f"unexpected node {type(node).__name__}")


def _array_to_json(array: PacketArray) -> List[Json]:
    items = array.items
    if not isinstance(items, (list, tuple)):
        raise ValueConversionError(ErrorCode.ARRAY_CONVERSION, detail="array items must be a sequence")
    return [_node_to_json(item, ErrorCode.ARRAY_CONVERSION) for item in items]


def _object_to_json(obj: PacketObject) -> Dict[str, Json]:
    entries = obj.entries
    if not isinstance(entries, Mapping):
        raise ValueConversionError(ErrorCode.OBJECT_CONVERSION, detail="object entries must be a mapping")
    out: Dict[str, Json] = {}
    for key, value in entries.items():
        if not isinstance(key, str):
            raise ValueConversionError(ErrorCode.OBJECT_CONVERSION, detail=f"non-str key {key!r}")
        out[key] = _node_to_json(value, ErrorCode.OBJECT_CONVERSION)
    return out
