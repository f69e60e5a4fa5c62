"""Bitcoin primitives — transaction codec and private key encoding."""

from gdk_rpc.btc.keys import encode_wif, validate_secret_key
from gdk_rpc.btc.transaction import Transaction, TxInput, TxOutput

__all__ = [
    "Transaction",
    "TxInput",
    "TxOutput",
    "encode_wif",
    "validate_secret_key",
]
