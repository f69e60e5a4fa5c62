"""Backend networks — registry and credential resolution."""

from gdk_rpc.network.credentials import Credential, connect, read_cookie, resolve_credential
from gdk_rpc.network.registry import NetworkDescriptor, NetworkRegistry

__all__ = [
    "Credential",
    "NetworkDescriptor",
    "NetworkRegistry",
    "connect",
    "read_cookie",
    "resolve_credential",
]
