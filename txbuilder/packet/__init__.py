"""
txbuilder.packet
================

Packet sections: the restricted value model (`value`) and the builder that
turns a value tree or external JSON into `PacketData` (`builder`).
"""

from .builder import Input, Output, PacketBuilder, PacketData, Readonly
from .value import (PacketArray, PacketObject, PacketString, PacketValue,
                    packet_value)

__all__ = [
    "PacketValue",
    "PacketString",
    "PacketArray",
    "PacketObject",
    "packet_value",
    "PacketBuilder",
    "PacketData",
    "Input",
    "Output",
    "Readonly",
]
