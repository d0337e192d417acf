"""Tests for the byte-keyed ordered map."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from relay_spec.subspecs.forks import ForkIndex


class TestForkIndex:
    def test_empty(self) -> None:
        index: ForkIndex[int] = ForkIndex()
        assert len(index) == 0
        assert list(index) == []
        assert index.lookup(b"\x00") is None
        assert not index.exists(b"\x00")

    def test_insert_and_lookup(self) -> None:
        index: ForkIndex[str] = ForkIndex()
        index.insert(b"\x02", "two")
        index.insert(b"\x01", "one")

        assert index.lookup(b"\x01") == "one"
        assert index.lookup(b"\x02") == "two"
        assert index.exists(b"\x02")
        assert b"\x01" in index
        assert "\x01" not in index

    def test_insert_replaces(self) -> None:
        index = ForkIndex([(b"\x01", "old")])
        index.insert(b"\x01", "new")
        assert len(index) == 1
        assert index.lookup(b"\x01") == "new"

    def test_delete(self) -> None:
        index = ForkIndex([(b"\x01", 1), (b"\x02", 2)])
        index.delete(b"\x01")
        assert list(index.items()) == [(b"\x02", 2)]

    def test_delete_missing_raises(self) -> None:
        index = ForkIndex([(b"\x01", 1)])
        with pytest.raises(KeyError):
            index.delete(b"\x02")

    def test_unsigned_lexicographic_order(self) -> None:
        # 0x80 sorts after 0x7f: bytes are unsigned.
        # A shorter key sorts before any key it prefixes.
        keys = [b"\x80", b"\x7f\xff", b"\x00\x01", b"\x7f", b"\xff", b"\x00"]
        index = ForkIndex((key, key) for key in keys)

        assert list(index.keys()) == [b"\x00", b"\x00\x01", b"\x7f", b"\x7f\xff", b"\x80", b"\xff"]
        assert list(index.values()) == list(index.keys())

    def test_iteration_is_a_snapshot(self) -> None:
        index = ForkIndex([(b"\x01", 1), (b"\x02", 2)])
        for key in index:
            index.delete(key)
        assert len(index) == 0

    @given(st.dictionaries(st.binary(max_size=4), st.integers()))
    def test_matches_sorted_dict(self, entries: dict[bytes, int]) -> None:
        index = ForkIndex(entries.items())
        assert list(index.items()) == sorted(entries.items())
        for key, value in entries.items():
            assert index.lookup(key) == value
