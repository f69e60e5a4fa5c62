"""Shared test fixtures for the gdk-rpc test suite."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

import httpx
import pytest

from gdk_rpc.btc.transaction import Transaction, TxInput, TxOutput
from gdk_rpc.config.settings import NetworkKind
from gdk_rpc.network.credentials import Credential
from gdk_rpc.network.registry import NetworkDescriptor, NetworkRegistry
from gdk_rpc.rpc.client import BitcoindClient

# Standard 12-word BIP39 test vector
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)

P2PKH_SCRIPT = bytes.fromhex("76a914" + "ab" * 20 + "88ac")
P2WPKH_SCRIPT = bytes.fromhex("0014" + "cd" * 20)


def make_legacy_tx(*, locktime: int = 0, version: int = 2) -> Transaction:
    """A 142-byte legacy transaction (weight 568)."""
    return Transaction(
        version=version,
        inputs=[TxInput(b"\x11" * 32, 0, script_sig=b"\x51" * 57)],
        outputs=[TxOutput(5000, P2PKH_SCRIPT)],
        locktime=locktime,
    )


def make_segwit_tx() -> Transaction:
    """A P2WPKH spend: 82 base bytes, 192 total bytes, weight 438."""
    return Transaction(
        version=2,
        inputs=[TxInput(b"\x22" * 32, 1, witness=[b"\x30" * 72, b"\x02" * 33])],
        outputs=[TxOutput(12_000, P2WPKH_SCRIPT)],
        locktime=101,
    )


def make_entry(tx: Transaction, **overrides: Any) -> dict[str, Any]:
    """A ``listtransactions`` entry describing ``tx``."""
    entry: dict[str, Any] = {
        "category": "receive",
        "txid": tx.txid(),
        "blockhash": "00" * 4 + "ef" * 28,
        "time": 1_600_000_000,
        "bip125-replaceable": "no",
        "label": "",
        "amount": Decimal("0.00005"),
    }
    entry.update(overrides)
    return entry


class FakeBitcoind:
    """In-memory JSON-RPC handler standing in for bitcoind's wallet."""

    def __init__(self) -> None:
        self.balance = Decimal("0")
        self.entries: list[dict[str, Any]] = []
        self.raw: dict[str, str] = {}
        self.seeds: set[str] = set()
        self.calls: list[tuple[str, list[Any]]] = []

    def add(self, tx: Transaction, **overrides: Any) -> dict[str, Any]:
        entry = make_entry(tx, **overrides)
        self.entries.append(entry)
        self.raw[tx.txid()] = tx.serialize().hex()
        return entry

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method, params = body["method"], body["params"]
        self.calls.append((method, params))
        if method == "sethdseed":
            wif = params[1]
            if wif in self.seeds:
                return self._error(
                    -5, "Already have this key (either as an HD seed or as a loose private key)"
                )
            self.seeds.add(wif)
            return self._result(None, body["id"])
        if method == "getbalance":
            return self._result(self.balance, body["id"])
        if method == "listtransactions":
            _, count, skip = params
            return self._result(self.entries[skip : skip + count], body["id"])
        if method == "getrawtransaction":
            txid = params[0]
            if txid not in self.raw:
                return self._error(-5, "No such mempool or blockchain transaction")
            return self._result(self.raw[txid], body["id"])
        return self._error(-32601, "Method not found", status=404)

    @staticmethod
    def _result(result: Any, request_id: Any) -> httpx.Response:
        # Decimal amounts are emitted as bare JSON numbers
        content = json.dumps({"result": result, "error": None, "id": request_id}, default=float)
        return httpx.Response(200, content=content.encode())

    @staticmethod
    def _error(code: int, message: str, *, status: int = 500) -> httpx.Response:
        return httpx.Response(
            status, json={"result": None, "error": {"code": code, "message": message}, "id": 1}
        )


_ENV_VARS = (
    "BITCOIND_URL",
    "BITCOIND_DIR",
    "BITCOIND_DATADIR",
    "DATADIR",
    "BITCOIND_USER",
    "BITCOIND_PASSWORD",
    "BITCOIND_TIMEOUT",
    "GDKRPC_DEBUG",
    "GDKRPC_NETWORK",
    "GDKRPC_CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def regtest_network() -> NetworkDescriptor:
    return NetworkDescriptor(
        id="regtest",
        name="Regtest",
        network=NetworkKind.REGTEST,
        rpc_url="http://127.0.0.1:18443",
        rpc_cred=("user", "pass"),
    )


@pytest.fixture
def registry(regtest_network: NetworkDescriptor) -> NetworkRegistry:
    return NetworkRegistry([regtest_network])


@pytest.fixture
def fake_bitcoind() -> FakeBitcoind:
    return FakeBitcoind()


@pytest.fixture
async def rpc_client(fake_bitcoind: FakeBitcoind):
    """A connected BitcoindClient talking to :class:`FakeBitcoind`."""
    client = BitcoindClient(
        "http://127.0.0.1:18443",
        Credential("user", "pass"),
        transport=httpx.MockTransport(fake_bitcoind.handler),
    )
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
def mnemonic_phrase() -> str:
    return TEST_MNEMONIC


@pytest.fixture
def legacy_tx() -> Transaction:
    return make_legacy_tx()


@pytest.fixture
def segwit_tx() -> Transaction:
    return make_segwit_tx()


@pytest.fixture
def entry_factory():
    """Build ``listtransactions`` entries: ``entry_factory(tx, **overrides)``."""
    return make_entry


@pytest.fixture
def legacy_tx_factory():
    """Build distinct legacy transactions: ``legacy_tx_factory(locktime=n)``."""
    return make_legacy_tx
