"""
Signing identities for a transaction: an ordered, append-only list of
(stream id, key) pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Mapping, Tuple, Union

from ..wallet.keys import Key

__all__ = ["Signee", "Signees", "make_signees"]


@dataclass(frozen=True)
class Signee:
    stream_id: str
    key: Key


class Signees:
    def __init__(self) -> None:
        self._keys: List[Signee] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[Signee]:
        return iter(list(self._keys))

    def __repr__(self) -> str:
        ids = ", ".join(s.stream_id for s in self._keys)
        return f"Signees([{ids}])"

    def add(self, key: Key, stream_id: str) -> "Signees":
        """Bind `key` to an existing stream id. Duplicates are kept."""
        self._keys.append(Signee(stream_id=str(stream_id), key=key))
        return self

    def add_selfsign(self, key: Key) -> "Signees":
        """Bind `key` to its own name (no stream exists yet, e.g. onboarding)."""
        self._keys.append(Signee(stream_id=key.name, key=key))
        return self

    def get(self) -> List[Signee]:
        return list(self._keys)

    def copy(self) -> "Signees":
        other = Signees()
        other._keys = list(self._keys)
        return other


SigneeEntry = Union[Key, Tuple[str, Key], Mapping[str, Key]]


def make_signees(*entries: SigneeEntry) -> Signees:
    """
    Shorthand for building a registry.

        make_signees(key)                      # self-sign
        make_signees(("s1", k1), ("s2", k2))   # explicit stream ids
        make_signees({"s1": k1, "s2": k2})
    """
    signees = Signees()
    for entry in entries:
        if isinstance(entry, Key):
            signees.add_selfsign(entry)
        elif isinstance(entry, Mapping):
            for stream_id, key in entry.items():
                signees.add(key, stream_id)
        elif isinstance(entry, tuple) and len(entry) == 2:
            stream_id, key = entry
            signees.add(key, stream_id)
        else:
            raise TypeError(f"cannot interpret signee entry {entry!r}")
    return signees
