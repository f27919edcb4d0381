"""
txbuilder.packet.value
======================

The restricted value model for one section of a transaction packet.

A `PacketValue` is exactly one of:

    PacketString(text)                 -> JSON string
    PacketArray(items)                 -> JSON array (order preserved)
    PacketObject(entries)              -> JSON object (string keys)

Numbers, booleans and null are deliberately not representable. Sections that
need them must be supplied as external JSON (see
`PacketBuilder.from_json`).

Authoring trees by hand is verbose, so `packet_value` accepts ordinary Python
literals and converts them:

    >>> packet_value({"s1": {"a": "b"}, "tags": ["x", "y"]})
    PacketObject(entries={'s1': PacketObject(...), 'tags': PacketArray(...)})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple, Union

__all__ = [
    "PacketString",
    "PacketArray",
    "PacketObject",
    "PacketValue",
    "packet_value",
]


@dataclass(frozen=True)
class PacketString:
    text: str


@dataclass(frozen=True)
class PacketArray:
    items: Tuple["PacketValue", ...] = ()


@dataclass(frozen=True)
class PacketObject:
    entries: Mapping[str, "PacketValue"] = field(default_factory=dict)


PacketValue = Union[PacketString, PacketArray, PacketObject]

_NODE_TYPES = (PacketString, PacketArray, PacketObject)


def packet_value(obj: Any) -> PacketValue:
    """
    Convert a native literal (str / list / tuple / dict) into a PacketValue.

    PacketValue nodes are passed through unchanged. Dict keys must be strings.
    Anything else (numbers, booleans, None, ...) raises TypeError.
    """
    if isinstance(obj, _NODE_TYPES):
        return obj
    if isinstance(obj, str):
        return PacketString(obj)
    if isinstance(obj, (list, tuple)):
        return PacketArray(tuple(packet_value(item) for item in obj))
    if isinstance(obj, Mapping):
        entries = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"packet object keys must be str, got {type(key).__name__}")
            entries[key] = packet_value(value)
        return PacketObject(entries)
    raise TypeError(f"cannot represent {type(obj).__name__} as a packet value")
