"""Wallet session — seed registration, balance and transaction history.

Each operation awaits its backend calls one after another; nothing runs in
parallel inside a request, and a failing call fails the whole operation.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from gdk_rpc.errors.definitions import ErrInvalidPage
from gdk_rpc.errors.gdk_errors import DataShapeError
from gdk_rpc.errors.rpc_errors import RPCError, absorb_sethdseed_error
from gdk_rpc.wallet.models import AccountSummary, Page, TransactionDescriptor, TxCategory
from gdk_rpc.wallet.seed import mnemonic_to_wif
from gdk_rpc.wallet.translator import parse_hash, translate
from gdk_rpc.wallet.units import btc_to_sat, format_amount, sat_to_units

if TYPE_CHECKING:
    from gdk_rpc.network.registry import NetworkDescriptor
    from gdk_rpc.rpc.client import BitcoindClient
    from gdk_rpc.wallet.models import NormalizedTransaction

logger = logging.getLogger(__name__)

PER_PAGE = 10

# Placeholder pricing until a rate feed is wired in.
FIAT_EXCHANGE_RATE = Decimal(420)
FIAT_CURRENCY = "USD"


class WalletSession:
    """GDK wallet operations backed by one bitcoind wallet.

    Usage::

        rpc = await connect(network)
        session = WalletSession(rpc, network)
        await session.register(phrase)
        page = await session.get_transactions(0)
    """

    def __init__(self, rpc: BitcoindClient, network: NetworkDescriptor) -> None:
        self._rpc = rpc
        self._network = network

    @property
    def network(self) -> NetworkDescriptor:
        return self._network

    async def close(self) -> None:
        """Close the backend connection."""
        await self._rpc.close()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register(self, mnemonic: str) -> None:
        """Install the mnemonic's seed as the backend wallet's HD seed.

        Safe to repeat with the same phrase. Destructive otherwise: bitcoind
        replaces whatever seed it held, and no check is made that the wallet
        is unused.

        Raises:
            ValidationError: If the mnemonic is invalid.
            RPCError: For any backend failure other than the idempotent ones.
        """
        wif = mnemonic_to_wif(mnemonic, testnet=self._network.testnet)
        logger.warning(
            "Setting HD seed on %s backend; any previous seed is replaced", self._network.id
        )
        try:
            await self._rpc.sethdseed(wif, newkeypool=True)
        except RPCError as exc:
            absorb_sethdseed_error(exc)
            logger.warning("sethdseed reported %s; treating as registered", exc.code)
            return
        logger.info("HD seed registered on %s backend", self._network.id)

    async def login(self, mnemonic: str) -> None:
        """Same as :meth:`register`; there is no separate session state."""
        await self.register(mnemonic)

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def get_account(self) -> AccountSummary:
        """Total wallet balance in every denomination, plus a fiat value."""
        balance = btc_to_sat(await self._rpc.getbalance())
        units = sat_to_units(balance)
        # rate is applied to the satoshi figure
        fiat = Decimal(balance) * FIAT_EXCHANGE_RATE
        return AccountSummary(
            **units,
            fiat=format_amount(fiat),
            fiat_rate=format_amount(FIAT_EXCHANGE_RATE),
            fiat_currency=FIAT_CURRENCY,
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transactions(self, page: int) -> Page:
        """One page of wallet history, most recent backend ordering.

        A full page may be followed by more, so it advertises ``page + 1``;
        a short page ends the list. Immature coinbase entries are skipped.

        Raises:
            ValidationError: On a bad page number, category or hash.
            DataShapeError: If an entry lacks a required field.
            RPCError: If any backend call fails.
        """
        if isinstance(page, bool) or not isinstance(page, int) or page < 0:
            raise ErrInvalidPage
        entries = await self._rpc.listtransactions(
            label="*", count=PER_PAGE, skip=PER_PAGE * page
        )
        potentially_has_more = len(entries) == PER_PAGE

        transactions: list[NormalizedTransaction] = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise DataShapeError("listtransactions entry is not an object")
            if entry.get("category") == TxCategory.IMMATURE:
                continue
            descriptor = TransactionDescriptor.from_dict(entry)
            parse_hash(descriptor.txid, "txid")
            parse_hash(descriptor.blockhash, "blockhash")
            body = await self._rpc.getrawtransaction(descriptor.txid, descriptor.blockhash)
            transactions.append(translate(descriptor, body))

        logger.debug("page %d: %d of %d entries listed", page, len(transactions), len(entries))
        return Page(
            page_id=page,
            next_page_id=page + 1 if potentially_has_more else None,
            transactions=transactions,
        )
