"""Transaction translator — bitcoind descriptor + raw body → GDK record."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gdk_rpc.errors.definitions import ErrInvalidTxCategory
from gdk_rpc.errors.gdk_errors import DataShapeError, ValidationError
from gdk_rpc.wallet.models import Direction, NormalizedTransaction, TxCategory
from gdk_rpc.wallet.units import btc_to_sat

if TYPE_CHECKING:
    from gdk_rpc.btc.transaction import Transaction
    from gdk_rpc.wallet.models import TransactionDescriptor

_HASH_RE = re.compile(r"[0-9a-fA-F]{64}")

_DIRECTIONS = {
    TxCategory.SEND: Direction.OUTGOING,
    TxCategory.RECEIVE: Direction.INCOMING,
}


def parse_hash(value: str, field: str) -> bytes:
    """Decode a 32-byte hash given in display hex.

    Raises:
        ValidationError: If ``value`` is not 64 hex characters.
    """
    if not _HASH_RE.fullmatch(value):
        raise ValidationError(f"invalid {field}: {value!r}", code="invalid-hash")
    return bytes.fromhex(value)[::-1]


def classify_direction(category: str) -> Direction:
    """Map a ``listtransactions`` category to a GDK direction."""
    try:
        return _DIRECTIONS[TxCategory(category)]
    except (KeyError, ValueError):
        raise ErrInvalidTxCategory from None


def compute_fee(descriptor: TransactionDescriptor) -> int:
    """Fee in satoshis; bitcoind reports paid fees as negative BTC."""
    if descriptor.fee is None:
        return 0
    return btc_to_sat(abs(descriptor.fee))


def translate(descriptor: TransactionDescriptor, body: Transaction) -> NormalizedTransaction:
    """Merge a descriptor and its decoded transaction into a GDK record.

    Raises:
        ValidationError: On an unexpected category or malformed hashes.
        DataShapeError: If the transaction has a zero virtual size.
    """
    direction = classify_direction(descriptor.category)
    parse_hash(descriptor.txid, "txid")
    parse_hash(descriptor.blockhash, "blockhash")

    raw = body.serialize()
    weight = body.weight
    vsize = body.vsize
    # relayed transactions always have a positive weight
    if vsize == 0:
        raise DataShapeError(f"transaction {descriptor.txid} has zero virtual size")
    fee = compute_fee(descriptor)

    return NormalizedTransaction(
        txhash=body.txid(),
        transaction=raw.hex(),
        transaction_version=body.version,
        transaction_locktime=body.locktime,
        transaction_size=len(raw),
        transaction_vsize=vsize,
        transaction_weight=weight,
        type=direction,
        fee=fee,
        fee_rate=fee / vsize,
        rbf_optin=descriptor.bip125_replaceable == "yes",
        created_at=descriptor.time,
        memo=descriptor.label,
    )
