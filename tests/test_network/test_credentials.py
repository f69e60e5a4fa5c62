"""Tests for RPC credential resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gdk_rpc.config.settings import NetworkKind
from gdk_rpc.errors import ConfigurationError
from gdk_rpc.network.credentials import Credential, connect, read_cookie, resolve_credential
from gdk_rpc.network.registry import NetworkDescriptor

if TYPE_CHECKING:
    from pathlib import Path


def _network(**kwargs) -> NetworkDescriptor:
    return NetworkDescriptor(
        id="regtest",
        name="Regtest",
        network=NetworkKind.REGTEST,
        rpc_url="http://127.0.0.1:18443",
        **kwargs,
    )


class TestReadCookie:
    def test_parse(self, tmp_path: Path) -> None:
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:abc123")
        assert read_cookie(cookie) == Credential("__cookie__", "abc123")

    def test_splits_on_first_colon(self, tmp_path: Path) -> None:
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:pa:ss\n")
        assert read_cookie(cookie) == Credential("__cookie__", "pa:ss")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            read_cookie(tmp_path / "absent")
        assert exc_info.value.code == "unreadable-cookie"

    def test_no_colon(self, tmp_path: Path) -> None:
        cookie = tmp_path / ".cookie"
        cookie.write_text("garbage")
        with pytest.raises(ConfigurationError) as exc_info:
            read_cookie(cookie)
        assert exc_info.value.code == "malformed-cookie"

    def test_repr_masks_password(self) -> None:
        assert "hunter2" not in repr(Credential("u", "hunter2"))


class TestResolveCredential:
    def test_explicit_preferred(self, tmp_path: Path) -> None:
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:fromfile")
        net = _network(rpc_cred=("alice", "pw"), rpc_cookie=str(cookie))
        assert resolve_credential(net) == Credential("alice", "pw")

    def test_cookie_fallback(self, tmp_path: Path) -> None:
        cookie = tmp_path / ".cookie"
        cookie.write_text("__cookie__:fromfile")
        assert resolve_credential(_network(rpc_cookie=str(cookie))) == Credential(
            "__cookie__", "fromfile"
        )

    def test_unreadable_cookie(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            resolve_credential(_network(rpc_cookie=str(tmp_path / "gone")))

    def test_nothing_configured(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_credential(_network())
        assert exc_info.value.code == "missing-credentials"


class TestConnect:
    async def test_returns_connected_client(self, regtest_network: NetworkDescriptor) -> None:
        client = await connect(regtest_network, timeout=5.0)
        try:
            assert client.is_connected
            assert client.url == regtest_network.rpc_url
        finally:
            await client.close()
        assert not client.is_connected

    async def test_missing_credentials(self) -> None:
        with pytest.raises(ConfigurationError):
            await connect(_network())
