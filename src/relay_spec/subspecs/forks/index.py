"""
Fork Index

An ordered map keyed by raw byte strings.

Keys compare in unsigned lexicographic byte order, which is the order of
Python's `bytes`. Iteration always follows that order, so anything built
from the index serializes identically for equivalent inputs.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

V = TypeVar("V")


class ForkIndex(Generic[V]):
    """Sorted key/value store over byte keys."""

    __slots__ = ("_keys", "_values")

    def __init__(self, items: Iterable[tuple[bytes, V]] = ()) -> None:
        self._keys: list[bytes] = []
        self._values: list[V] = []
        for key, value in items:
            self.insert(key, value)

    def _position(self, key: bytes) -> int:
        return bisect.bisect_left(self._keys, bytes(key))

    def insert(self, key: bytes, value: V) -> None:
        """Insert `value` under `key`, replacing any previous value."""
        key = bytes(key)
        position = self._position(key)
        if position < len(self._keys) and self._keys[position] == key:
            self._values[position] = value
            return
        self._keys.insert(position, key)
        self._values.insert(position, value)

    def lookup(self, key: bytes) -> V | None:
        """Return the value stored under `key`, or None."""
        position = self._position(key)
        if position < len(self._keys) and self._keys[position] == key:
            return self._values[position]
        return None

    def exists(self, key: bytes) -> bool:
        """Whether `key` is present."""
        position = self._position(key)
        return position < len(self._keys) and self._keys[position] == key

    def delete(self, key: bytes) -> None:
        """
        Remove `key` and its value.

        Raises:
            KeyError: If `key` is absent.
        """
        position = self._position(key)
        if position == len(self._keys) or self._keys[position] != key:
            raise KeyError(bytes(key).hex())
        del self._keys[position]
        del self._values[position]

    def keys(self) -> Iterator[bytes]:
        """Keys in ascending byte order."""
        return iter(list(self._keys))

    def values(self) -> Iterator[V]:
        """Values in ascending key order."""
        return iter(list(self._values))

    def items(self) -> Iterator[tuple[bytes, V]]:
        """Key/value pairs in ascending key order."""
        return iter(list(zip(self._keys, self._values, strict=True)))

    def __iter__(self) -> Iterator[bytes]:
        return self.keys()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and self.exists(bytes(key))
