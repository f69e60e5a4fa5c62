"""gdk-rpc — GDK-compatible wallet adapter for a bitcoind RPC backend."""

__version__ = "0.1.0"
