"""Tests for transaction identifiers."""

import pytest

from relay_spec.subspecs.errors import StructuralDecodeError
from relay_spec.subspecs.merkle import double_sha256
from relay_spec.subspecs.tx import is_witness_transaction, strip_witness, transaction_id

# Coinbase of mainnet block 865494, segwit serialization.
WITNESS_COINBASE = bytes.fromhex(
    "010000000001010000000000000000000000000000000000000000000000000000000000000000ffffffff"
    "2503233708184d696e656420627920416e74506f6f6c373946205b8160a4256c0000946e0100ffffffff"
    "02f595814a000000001976a914edf10a7fac6b32e24daa5305c723f3de58db1bc888ac00000000000000"
    "00266a24aa21a9edfaa194df59043645ba0f58aad74bfd5693fa497093174d12a4bb3b0574a878db0120"
    "000000000000000000000000000000000000000000000000000000000000000000000000"
)
WITNESS_COINBASE_TXID = "31e9370f45eb48f6f52ef683b0737332f09f1cead75608021185450422ec1a71"

# Genesis coinbase, legacy serialization.
GENESIS_COINBASE = bytes.fromhex(
    "01000000010000000000000000000000000000000000000000000000000000000000000000ffffffff"
    "4d04ffff001d0104455468652054696d65732030332f4a616e2f32303039204368616e63656c6c6f72"
    "206f6e206272696e6b206f66207365636f6e64206261696c6f757420666f722062616e6b73ffffffff"
    "0100f2052a01000000434104678afdb0fe5548271967f1a67130b7105cd6a828e03909a67962e0ea1f"
    "61deb649f6bc3f4cef38c4f35504e51ec112de5c384df7ba0b8d578a4c702b6bf11d5fac00000000"
)
GENESIS_COINBASE_TXID = "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b"


class TestWitnessDetection:
    def test_witness(self) -> None:
        assert is_witness_transaction(WITNESS_COINBASE)

    def test_legacy(self) -> None:
        assert not is_witness_transaction(GENESIS_COINBASE)

    def test_too_short(self) -> None:
        assert not is_witness_transaction(b"\x01\x00\x00\x00\x00")


class TestStripWitness:
    def test_legacy_unchanged(self) -> None:
        assert strip_witness(GENESIS_COINBASE) == GENESIS_COINBASE

    def test_removes_marker_flag_and_witness(self) -> None:
        stripped = strip_witness(WITNESS_COINBASE)

        # Marker and flag (2 bytes) plus one witness stack of one 32-byte item (34 bytes).
        assert len(stripped) == len(WITNESS_COINBASE) - 2 - 34
        assert stripped[:4] == WITNESS_COINBASE[:4]
        assert stripped[4:].startswith(WITNESS_COINBASE[6:40])
        assert stripped[-4:] == WITNESS_COINBASE[-4:]

    @pytest.mark.parametrize("cut", [1, 4, 40, 100])
    def test_truncated(self, cut: int) -> None:
        with pytest.raises(StructuralDecodeError, match="Transaction"):
            strip_witness(WITNESS_COINBASE[:-cut])

    def test_trailing_bytes(self) -> None:
        with pytest.raises(StructuralDecodeError, match="trailing"):
            strip_witness(WITNESS_COINBASE + b"\x00")


class TestTransactionId:
    @pytest.mark.parametrize(
        "raw_tx,expected",
        [
            (WITNESS_COINBASE, WITNESS_COINBASE_TXID),
            (GENESIS_COINBASE, GENESIS_COINBASE_TXID),
        ],
    )
    def test_known_txids(self, raw_tx: bytes, expected: str) -> None:
        assert transaction_id(raw_tx).to_display_hex() == expected

    def test_legacy_txid_hashes_raw_bytes(self) -> None:
        assert transaction_id(GENESIS_COINBASE) == double_sha256(GENESIS_COINBASE)
