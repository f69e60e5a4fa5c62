"""Tests for Base58Check, WIF and secret key validation."""

from __future__ import annotations

import pytest

from gdk_rpc.btc.keys import (
    MAINNET_WIF,
    TESTNET_WIF,
    base58_encode,
    base58check_encode,
    encode_wif,
    validate_secret_key,
)

# Bitcoin wiki WIF example
_WIKI_PRIVKEY = bytes.fromhex(
    "0c28fca386c7a227600b2fe50b7cae11ec86d3bf1fbe471be89827e19d72aa1d"
)
_WIKI_WIF = "5HueCGU8rMjxEXxiPuD5BDku4MkFqeZyd4dZ1jvhTVqvbTLvyTJ"
_WIKI_WIF_COMPRESSED = "KwdMAjGmerYanjeui5SHS7JkmpZvVipYvB2LJGU1ZxJwYvP98617"

_SECP256K1_ORDER = int(
    "fffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141", 16
)


class TestBase58:
    def test_leading_zeros_preserved(self) -> None:
        assert base58_encode(b"\x00\x00\x01") == "112"

    def test_empty(self) -> None:
        assert base58_encode(b"") == ""

    def test_check_appends_checksum(self) -> None:
        assert base58check_encode(MAINNET_WIF + _WIKI_PRIVKEY) == _WIKI_WIF


class TestValidateSecretKey:
    def test_accepts_valid(self) -> None:
        assert validate_secret_key(_WIKI_PRIVKEY) == _WIKI_PRIVKEY

    def test_rejects_zero(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            validate_secret_key(b"\x00" * 32)

    def test_rejects_curve_order(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            validate_secret_key(_SECP256K1_ORDER.to_bytes(32, "big"))

    def test_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            validate_secret_key(b"\x01" * 31)


class TestWIF:
    def test_known_uncompressed_mainnet(self) -> None:
        assert encode_wif(_WIKI_PRIVKEY, compressed=False) == _WIKI_WIF

    def test_known_compressed_mainnet(self) -> None:
        assert encode_wif(_WIKI_PRIVKEY) == _WIKI_WIF_COMPRESSED

    def test_testnet_uncompressed(self) -> None:
        wif = encode_wif(_WIKI_PRIVKEY, compressed=False, testnet=True)
        # 0xef-prefixed uncompressed keys start with '9'
        assert wif.startswith("9")
        assert wif == base58check_encode(TESTNET_WIF + _WIKI_PRIVKEY)

    def test_testnet_compressed_flag(self) -> None:
        wif = encode_wif(_WIKI_PRIVKEY, testnet=True)
        assert wif == base58check_encode(TESTNET_WIF + _WIKI_PRIVKEY + b"\x01")
        assert wif[0] == "c"

    def test_invalid_secret(self) -> None:
        with pytest.raises(ValueError):
            encode_wif(b"\x00" * 32)
