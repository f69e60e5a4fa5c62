"""Private key encoding — secp256k1 secret validation and WIF.

bitcoind's ``sethdseed`` takes the new seed as a WIF string, so this module
only covers the path raw secret → Base58Check WIF.
"""

from __future__ import annotations

from ecdsa import SECP256k1, SigningKey
from ecdsa.keys import MalformedPointError

from gdk_rpc.utils.crypto import sha256d

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_CURVE = SECP256k1
_SECRET_LENGTH = 32

# WIF version bytes
MAINNET_WIF = b"\x80"
TESTNET_WIF = b"\xef"  # testnet, signet and regtest

# Trailing flag marking a key whose public key is serialized compressed
_COMPRESSED_FLAG = b"\x01"

_B58_DIGITS = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_CHECKSUM_LENGTH = 4


# ---------------------------------------------------------------------------
# Base58Check
# ---------------------------------------------------------------------------


def base58_encode(data: bytes) -> str:
    """Base58-encode ``data``; each leading zero byte becomes a ``1``."""
    zeros = len(data) - len(data.lstrip(b"\x00"))
    n = int.from_bytes(data, "big")
    digits = []
    while n:
        n, digit = divmod(n, 58)
        digits.append(_B58_DIGITS[digit])
    return "1" * zeros + "".join(reversed(digits))


def base58check_encode(payload: bytes) -> str:
    """Append the four-byte double-SHA256 checksum and Base58-encode."""
    return base58_encode(payload + sha256d(payload)[:_CHECKSUM_LENGTH])


# ---------------------------------------------------------------------------
# Secret keys
# ---------------------------------------------------------------------------


def validate_secret_key(secret: bytes) -> bytes:
    """Check that ``secret`` is a usable secp256k1 private key scalar.

    Args:
        secret: 32-byte big-endian scalar.

    Returns:
        The secret unchanged.

    Raises:
        ValueError: If the length is wrong or the scalar is outside ``[1, n-1]``.
    """
    if len(secret) != _SECRET_LENGTH:
        msg = f"Secret key must be {_SECRET_LENGTH} bytes, got {len(secret)}"
        raise ValueError(msg)
    if not 0 < int.from_bytes(secret, "big") < _CURVE.order:
        msg = "Secret key is out of range for secp256k1"
        raise ValueError(msg)
    try:
        SigningKey.from_string(secret, curve=_CURVE)
    except MalformedPointError as exc:
        raise ValueError(str(exc)) from exc
    return secret


# ---------------------------------------------------------------------------
# WIF
# ---------------------------------------------------------------------------


def encode_wif(secret: bytes, *, compressed: bool = True, testnet: bool = False) -> str:
    """Encode a secret key in Wallet Import Format.

    ``testnet`` selects the ``0xef`` version byte used by every non-mainnet
    chain; ``compressed=False`` omits the trailing ``0x01`` flag.

    Raises:
        ValueError: If ``secret`` is not a valid secp256k1 key.
    """
    payload = (TESTNET_WIF if testnet else MAINNET_WIF) + validate_secret_key(secret)
    if compressed:
        payload += _COMPRESSED_FLAG
    return base58check_encode(payload)

