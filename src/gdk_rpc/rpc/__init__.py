"""bitcoind JSON-RPC access."""

from gdk_rpc.rpc.client import BitcoindClient

__all__ = ["BitcoindClient"]
