"""Wallet session and GDK record translation."""

from gdk_rpc.wallet.models import AccountSummary, NormalizedTransaction, Page, TransactionDescriptor
from gdk_rpc.wallet.session import WalletSession
from gdk_rpc.wallet.translator import translate

__all__ = [
    "AccountSummary",
    "NormalizedTransaction",
    "Page",
    "TransactionDescriptor",
    "WalletSession",
    "translate",
]
