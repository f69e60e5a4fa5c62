"""Wallet data models — backend descriptors and GDK output records.

:class:`TransactionDescriptor` mirrors one ``listtransactions`` entry;
:class:`NormalizedTransaction`, :class:`AccountSummary` and :class:`Page`
are the GDK-shaped records handed to consumers via ``to_dict()``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from gdk_rpc.errors.gdk_errors import DataShapeError
from gdk_rpc.wallet.units import to_decimal

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TxCategory(enum.StrEnum):
    """``listtransactions`` categories this adapter knows about."""

    SEND = "send"
    RECEIVE = "receive"
    IMMATURE = "immature"


class Direction(enum.StrEnum):
    """GDK transaction ``type`` values."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


# ---------------------------------------------------------------------------
# Backend descriptor
# ---------------------------------------------------------------------------


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if data.get(key) is None:
        raise DataShapeError(f"transaction entry is missing {key!r}")
    value = data[key]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DataShapeError(
            f"transaction entry field {key!r} has unexpected type {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class TransactionDescriptor:
    """One wallet transaction event as reported by ``listtransactions``.

    Attributes:
        category: ``send``, ``receive``, ``immature``, ...
        txid: Transaction id (display hex).
        blockhash: Hash of the containing block.
        time: Unix timestamp the wallet first saw the transaction.
        bip125_replaceable: ``yes``, ``no`` or ``unknown``.
        label: Address label, used as the memo.
        fee: Fee in BTC, negative for fees paid; absent on receives.
    """

    category: str
    txid: str
    blockhash: str
    time: int
    bip125_replaceable: str
    label: str | None = None
    fee: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransactionDescriptor:
        """Build a descriptor from a raw ``listtransactions`` entry.

        Raises:
            DataShapeError: If a required field is missing or mistyped.
        """
        fee = data.get("fee")
        if fee is not None:
            if isinstance(fee, bool) or not isinstance(fee, (Decimal, int, float)):
                raise DataShapeError(f"transaction entry field 'fee' has unexpected value {fee!r}")
            fee = to_decimal(fee)
        label = data.get("label")
        return cls(
            category=_require(data, "category", str),
            txid=_require(data, "txid", str),
            blockhash=_require(data, "blockhash", str),
            time=_require(data, "time", int),
            bip125_replaceable=_require(data, "bip125-replaceable", str),
            label=label if isinstance(label, str) else None,
            fee=fee,
        )


# ---------------------------------------------------------------------------
# GDK output records
# ---------------------------------------------------------------------------

# Not derivable from listtransactions yet; emitted verbatim for schema stability.
PLACEHOLDER_BLOCK_HEIGHT = 1


@dataclass(frozen=True)
class NormalizedTransaction:
    """A wallet transaction in GDK's transaction-list format."""

    txhash: str
    transaction: str
    transaction_version: int
    transaction_locktime: int
    transaction_size: int
    transaction_vsize: int
    transaction_weight: int
    type: Direction
    fee: int
    fee_rate: float
    rbf_optin: bool
    created_at: int
    memo: str | None = None
    block_height: int = PLACEHOLDER_BLOCK_HEIGHT
    cap_cpfp: bool = False
    can_rbf: bool = False
    has_payment_request: bool = False
    server_signed: bool = False
    user_signed: bool = True
    instant: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "block_height": self.block_height,
            "created_at": self.created_at,
            "type": self.type.value,
            "memo": self.memo,
            "txhash": self.txhash,
            "transaction": self.transaction,
            "transaction_version": self.transaction_version,
            "transaction_locktime": self.transaction_locktime,
            "transaction_size": self.transaction_size,
            "transaction_vsize": self.transaction_vsize,
            "transaction_weight": self.transaction_weight,
            "rbf_optin": self.rbf_optin,
            "cap_cpfp": self.cap_cpfp,
            "can_rbf": self.can_rbf,
            "has_payment_request": self.has_payment_request,
            "server_signed": self.server_signed,
            "user_signed": self.user_signed,
            "instant": self.instant,
            "fee": self.fee,
            "fee_rate": self.fee_rate,
        }


@dataclass(frozen=True)
class AccountSummary:
    """Balance of the backend wallet in every GDK denomination.

    Amount fields are decimal strings.
    """

    satoshi: str
    bits: str
    ubtc: str
    mbtc: str
    btc: str
    fiat: str
    fiat_rate: str
    fiat_currency: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "core",
            "pointer": 0,
            "receiving_id": "",
            "name": "RPC wallet",
            "has_transactions": True,
            "satoshi": self.satoshi,
            "bits": self.bits,
            # wire key spelled as GDK clients read it
            "ubts": self.ubtc,
            "mbtc": self.mbtc,
            "btc": self.btc,
            "fiat_rate": self.fiat_rate,
            "fiat_currency": self.fiat_currency,
            "fiat": self.fiat,
        }


@dataclass(frozen=True)
class Page:
    """One page of the transaction list."""

    page_id: int
    next_page_id: int | None
    transactions: list[NormalizedTransaction] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "list": [tx.to_dict() for tx in self.transactions],
            "page_id": self.page_id,
            "next_page_id": self.next_page_id,
        }
