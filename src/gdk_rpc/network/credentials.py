"""RPC credential resolution and connection setup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from gdk_rpc.errors.definitions import ErrMissingCredentials
from gdk_rpc.errors.gdk_errors import ConfigurationError
from gdk_rpc.rpc.client import BitcoindClient

if TYPE_CHECKING:
    from gdk_rpc.network.registry import NetworkDescriptor

logger = logging.getLogger(__name__)


class Credential(NamedTuple):
    """RPC username/password pair."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"


def read_cookie(path: str | Path) -> Credential:
    """Parse a bitcoind cookie file (``username:password``).

    The contents are split on the first colon, so passwords may contain colons.

    Raises:
        ConfigurationError: If the file cannot be read or has no colon.
    """
    try:
        contents = Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            f"cannot read rpc cookie file {path}: {exc}", code="unreadable-cookie"
        ) from exc
    username, sep, password = contents.partition(":")
    if not sep:
        raise ConfigurationError(f"malformed rpc cookie file {path}", code="malformed-cookie")
    return Credential(username, password)


def resolve_credential(network: NetworkDescriptor) -> Credential:
    """Resolve the RPC credential for ``network``.

    Order: the explicit credential, then the cookie file.

    Raises:
        ConfigurationError: If neither source is configured or the cookie
            file is unreadable or malformed.
    """
    if network.rpc_cred is not None:
        return Credential(*network.rpc_cred)
    if network.rpc_cookie:
        return read_cookie(network.rpc_cookie)
    raise ErrMissingCredentials


async def connect(network: NetworkDescriptor, *, timeout: float = 30.0) -> BitcoindClient:
    """Open an authenticated RPC client for ``network``."""
    credential = resolve_credential(network)
    client = BitcoindClient(network.rpc_url, credential, timeout=timeout)
    await client.connect()
    logger.info("Connected to %s backend at %s", network.id, network.rpc_url)
    return client
