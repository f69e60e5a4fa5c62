"""bitcoind JSON-RPC client — wallet calls used by the session.

Async HTTP client speaking JSON-RPC 1.0 to a bitcoind wallet:
- sethdseed(newkeypool, seed)
- getbalance()
- listtransactions(label, count, skip)
- getrawtransaction(txid, verbose, blockhash)

Amounts are decoded as :class:`~decimal.Decimal` so BTC values never pass
through binary floating point.
"""

from __future__ import annotations

import itertools
import json
import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import httpx

from gdk_rpc.btc.transaction import Transaction
from gdk_rpc.errors.gdk_errors import DataShapeError
from gdk_rpc.errors.rpc_errors import RPCNoResultError, RPCResponseError, RPCTransportError

if TYPE_CHECKING:
    from gdk_rpc.network.credentials import Credential

logger = logging.getLogger(__name__)


class BitcoindClient:
    """Async JSON-RPC client for a bitcoind wallet.

    One instance is shared by every request of a session; the underlying
    ``httpx.AsyncClient`` handles concurrent calls from the same event loop.

    Usage::

        rpc = BitcoindClient("http://127.0.0.1:18443", credential)
        await rpc.connect()
        try:
            balance = await rpc.getbalance()
        finally:
            await rpc.close()
    """

    def __init__(
        self,
        url: str,
        credential: Credential,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            url: bitcoind RPC endpoint, e.g. ``http://127.0.0.1:18443``.
            credential: RPC username/password pair.
            timeout: HTTP timeout in seconds.
            transport: Optional custom httpx transport.
        """
        self._url = url
        self._credential = credential
        self._timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(self._credential.username, self._credential.password),
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    @property
    def url(self) -> str:
        """The RPC endpoint this client talks to."""
        return self._url

    # ------------------------------------------------------------------
    # Generic call
    # ------------------------------------------------------------------

    async def call(self, method: str, *params: Any) -> Any:
        """Invoke an RPC method and return its ``result``.

        Raises:
            RPCTransportError: On HTTP failures or undecodable replies.
            RPCNoResultError: If the reply holds neither result nor error.
            RPCResponseError: If bitcoind returned an error object.
        """
        client = self._ensure_connected()
        payload = {
            "jsonrpc": "1.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params),
        }
        logger.debug("rpc call %s", method)

        try:
            response = await client.post(self._url, content=json.dumps(payload, default=str))
        except httpx.HTTPError as exc:
            raise RPCTransportError(f"rpc call {method!r} failed: {exc}", method=method) from exc

        # bitcoind reports RPC errors with HTTP 404/500 and a JSON body
        if not response.content:
            if response.is_success:
                raise RPCNoResultError(method)
            raise RPCTransportError(
                f"rpc call {method!r} failed with HTTP {response.status_code}",
                method=method,
                http_status=response.status_code,
            )
        try:
            body = response.json(parse_float=Decimal)
        except ValueError as exc:
            raise RPCTransportError(
                f"rpc call {method!r} returned a non-JSON reply (HTTP {response.status_code})",
                method=method,
                http_status=response.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise RPCTransportError(
                f"rpc call {method!r} returned an unexpected reply", method=method
            )

        error = body.get("error")
        if error is not None:
            if not isinstance(error, dict):
                raise RPCResponseError(0, str(error), method=method)
            raise RPCResponseError(
                int(error.get("code", 0)), str(error.get("message", "")), method=method
            )
        if "result" not in body:
            raise RPCNoResultError(method)
        return body["result"]

    # ------------------------------------------------------------------
    # Wallet API
    # ------------------------------------------------------------------

    async def sethdseed(self, wif: str, *, newkeypool: bool = True) -> None:
        """Replace the wallet's HD seed with ``wif``."""
        await self.call("sethdseed", newkeypool, wif)

    async def getbalance(self) -> Decimal:
        """Return the wallet's total balance in BTC."""
        result = await self.call("getbalance")
        if isinstance(result, bool) or not isinstance(result, (Decimal, int)):
            raise DataShapeError(f"getbalance returned {result!r}, expected a number")
        return Decimal(result)

    async def listtransactions(
        self, *, label: str = "*", count: int = 10, skip: int = 0
    ) -> list[dict[str, Any]]:
        """Return up to ``count`` wallet transaction entries, skipping ``skip``."""
        result = await self.call("listtransactions", label, count, skip)
        if not isinstance(result, list):
            raise DataShapeError(f"listtransactions returned {type(result).__name__}, expected list")
        return result

    async def getrawtransaction(self, txid: str, blockhash: str | None = None) -> Transaction:
        """Fetch a transaction by id (and containing block) and decode it.

        Raises:
            DataShapeError: If the returned hex does not decode.
        """
        params: list[Any] = [txid, False]
        if blockhash is not None:
            params.append(blockhash)
        raw_hex = await self.call("getrawtransaction", *params)
        if not isinstance(raw_hex, str):
            raise DataShapeError(f"getrawtransaction returned {raw_hex!r}, expected hex")
        try:
            return Transaction.from_hex(raw_hex)
        except ValueError as exc:
            raise DataShapeError(f"cannot decode transaction {txid}: {exc}") from exc

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "BitcoindClient is not connected — call connect() first"
            raise RuntimeError(msg)
        return self._client
