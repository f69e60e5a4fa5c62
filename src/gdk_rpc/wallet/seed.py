"""BIP39 mnemonic → bitcoind HD seed (WIF)."""

from __future__ import annotations

from mnemonic import Mnemonic

from gdk_rpc.btc.keys import encode_wif, validate_secret_key
from gdk_rpc.errors.definitions import ErrInvalidMnemonic
from gdk_rpc.errors.gdk_errors import ValidationError

_LANGUAGE = "english"
_SEED_KEY_LENGTH = 32

_mnemonic = Mnemonic(_LANGUAGE)


def normalize_phrase(phrase: str) -> str:
    """Collapse whitespace between words."""
    return " ".join(phrase.split())


def mnemonic_to_secret(phrase: str) -> bytes:
    """Derive the 32-byte HD seed secret from a mnemonic.

    The BIP39 seed is computed with an empty passphrase; its first 32 bytes
    become the secret.

    Raises:
        ValidationError: If the phrase fails the wordlist/checksum check or
            the derived bytes are not a valid secp256k1 key.
    """
    words = normalize_phrase(phrase)
    if not words or not _mnemonic.check(words):
        raise ErrInvalidMnemonic
    seed = Mnemonic.to_seed(words, passphrase="")
    try:
        return validate_secret_key(seed[:_SEED_KEY_LENGTH])
    except ValueError as exc:
        raise ValidationError(f"mnemonic yields an unusable key: {exc}", code="invalid-seed") from exc


def mnemonic_to_wif(phrase: str, *, testnet: bool = True) -> str:
    """Encode the mnemonic's seed secret as uncompressed WIF."""
    return encode_wif(mnemonic_to_secret(phrase), compressed=False, testnet=testnet)
