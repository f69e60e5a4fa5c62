"""Network registry — the immutable set of backend networks.

The registry is built once at startup from :class:`AppConfig` and passed to
whatever needs it. Cookie paths are resolved during construction and never
re-evaluated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from gdk_rpc.config.settings import NetworkKind
from gdk_rpc.errors.gdk_errors import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from gdk_rpc.config.settings import AppConfig, BitcoindConfig, NetworkConfig

REGTEST_ID = "regtest"
DEFAULT_TX_EXPLORER_URL = "https://blockstream.info/tx/"
COOKIE_FILENAME = ".cookie"


@dataclass(frozen=True)
class NetworkDescriptor:
    """A bitcoind backend reachable over JSON-RPC.

    Attributes:
        id: Registry key.
        name: Display name.
        network: Chain the backend runs on.
        rpc_url: JSON-RPC endpoint.
        rpc_cred: Explicit ``(username, password)``, if configured.
        rpc_cookie: Path of the cookie file, if configured.
        tx_explorer_url: Prefix of the block explorer's transaction page.
    """

    id: str
    name: str
    network: NetworkKind
    rpc_url: str
    rpc_cred: tuple[str, str] | None = None
    rpc_cookie: str | None = None
    tx_explorer_url: str = DEFAULT_TX_EXPLORER_URL

    @property
    def testnet(self) -> bool:
        """True for every network that uses testnet key prefixes."""
        return self.network is not NetworkKind.MAINNET

    def to_dict(self) -> dict[str, Any]:
        """Public view of the descriptor; the password is never included."""
        return {
            "id": self.id,
            "name": self.name,
            "network": self.network.value,
            "rpc_url": self.rpc_url,
            "rpc_cookie": self.rpc_cookie,
            "has_rpc_cred": self.rpc_cred is not None,
            "tx_explorer_url": self.tx_explorer_url,
        }


def default_cookie_path(kind: NetworkKind, datadir: str = "") -> str:
    """Locate the bitcoind cookie file for ``kind``.

    An explicit data directory wins; otherwise ``~/.bitcoin/<subdir>`` is used.
    """
    if datadir:
        return str(Path(datadir) / COOKIE_FILENAME)
    base = Path.home() / ".bitcoin"
    if kind.datadir_subdir:
        base = base / kind.datadir_subdir
    return str(base / COOKIE_FILENAME)


def _regtest_network(config: BitcoindConfig) -> NetworkDescriptor:
    cred = (config.user, config.password) if config.user and config.password else None
    return NetworkDescriptor(
        id=REGTEST_ID,
        name="Regtest",
        network=NetworkKind.REGTEST,
        rpc_url=config.url,
        rpc_cred=cred,
        rpc_cookie=default_cookie_path(NetworkKind.REGTEST, config.datadir),
    )


def _configured_network(config: NetworkConfig) -> NetworkDescriptor:
    cred = (config.rpc_user, config.rpc_password) if config.rpc_user else None
    cookie = config.rpc_cookie or None
    if cred is None and cookie is None:
        cookie = default_cookie_path(config.network)
    return NetworkDescriptor(
        id=config.id,
        name=config.name,
        network=config.network,
        rpc_url=config.rpc_url,
        rpc_cred=cred,
        rpc_cookie=cookie,
        tx_explorer_url=config.tx_explorer_url,
    )


class NetworkRegistry:
    """Read-only mapping from network id to :class:`NetworkDescriptor`.

    Safe to share between threads and tasks: nothing mutates it after
    construction.
    """

    def __init__(self, networks: Iterable[NetworkDescriptor]) -> None:
        entries: dict[str, NetworkDescriptor] = {}
        for net in networks:
            if net.id in entries:
                msg = f"duplicate network id: {net.id}"
                raise ValueError(msg)
            entries[net.id] = net
        self._networks: Mapping[str, NetworkDescriptor] = MappingProxyType(entries)

    @classmethod
    def from_config(cls, config: AppConfig) -> NetworkRegistry:
        """Build the registry: the built-in regtest network plus configured extras."""
        networks = [_regtest_network(config.bitcoind)]
        networks.extend(_configured_network(net) for net in config.networks)
        return cls(networks)

    def list_networks(self) -> Mapping[str, NetworkDescriptor]:
        """All networks, keyed by id."""
        return self._networks

    def get_network(self, network_id: str) -> NetworkDescriptor | None:
        """Look up a network; ``None`` if unknown."""
        return self._networks.get(network_id)

    def require_network(self, network_id: str) -> NetworkDescriptor:
        """Look up a network.

        Raises:
            NotFoundError: If the id is unknown.
        """
        network = self.get_network(network_id)
        if network is None:
            raise NotFoundError(f"unknown network: {network_id}", code="network-not-found")
        return network

    def __contains__(self, network_id: object) -> bool:
        return network_id in self._networks

    def __iter__(self) -> Iterator[NetworkDescriptor]:
        return iter(self._networks.values())

    def __len__(self) -> int:
        return len(self._networks)
