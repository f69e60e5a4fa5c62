"""Tests for mnemonic to HD seed conversion."""

from __future__ import annotations

import pytest
from mnemonic import Mnemonic

from gdk_rpc.btc.keys import encode_wif
from gdk_rpc.errors import ValidationError
from gdk_rpc.wallet.seed import mnemonic_to_secret, mnemonic_to_wif, normalize_phrase


class TestNormalizePhrase:
    def test_collapses_whitespace(self) -> None:
        assert normalize_phrase("  one\ttwo\n three ") == "one two three"


class TestMnemonicToSecret:
    def test_first_half_of_bip39_seed(self, mnemonic_phrase: str) -> None:
        expected = Mnemonic.to_seed(mnemonic_phrase, passphrase="")[:32]
        assert mnemonic_to_secret(mnemonic_phrase) == expected

    def test_deterministic(self, mnemonic_phrase: str) -> None:
        assert mnemonic_to_secret(mnemonic_phrase) == mnemonic_to_secret(
            f"  {mnemonic_phrase}\n"
        )

    def test_bad_checksum(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            mnemonic_to_secret(" ".join(["abandon"] * 12))
        assert exc_info.value.code == "invalid-mnemonic"

    def test_unknown_word(self) -> None:
        with pytest.raises(ValidationError):
            mnemonic_to_secret("abandon " * 11 + "bitcoinz")

    def test_empty(self) -> None:
        with pytest.raises(ValidationError):
            mnemonic_to_secret("   ")


class TestMnemonicToWif:
    def test_testnet_uncompressed(self, mnemonic_phrase: str) -> None:
        wif = mnemonic_to_wif(mnemonic_phrase)
        secret = mnemonic_to_secret(mnemonic_phrase)
        assert wif == encode_wif(secret, compressed=False, testnet=True)
        assert wif.startswith("9")

    def test_mainnet_prefix(self, mnemonic_phrase: str) -> None:
        wif = mnemonic_to_wif(mnemonic_phrase, testnet=False)
        assert wif.startswith("5")
        assert wif == encode_wif(mnemonic_to_secret(mnemonic_phrase), compressed=False)
