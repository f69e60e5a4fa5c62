"""JSON-RPC backend errors.

Every failure of a backend call surfaces as one of three variants:

* :class:`RPCTransportError` — the HTTP exchange itself failed.
* :class:`RPCNoResultError` — the reply carried neither a result nor an error.
* :class:`RPCResponseError` — bitcoind answered with a JSON-RPC error object.
"""

from __future__ import annotations

from gdk_rpc.errors.gdk_errors import BackendError

# bitcoind RPC_WALLET_ERROR, raised by sethdseed for a seed it already holds
RPC_WALLET_ERROR = -5
DUPLICATE_SEED_MESSAGE = "Already have this key (either as an HD seed or as a loose private key)"


class RPCError(BackendError):
    """Base class for JSON-RPC call failures."""

    def __init__(self, message: str, *, method: str = "", code: str = "rpc-error") -> None:
        super().__init__(message, code=code)
        self.method = method


class RPCTransportError(RPCError):
    """HTTP-level failure: connection refused, timeout, non-JSON reply."""

    def __init__(self, message: str, *, method: str = "", http_status: int | None = None) -> None:
        super().__init__(message, method=method, code="rpc-transport-error")
        self.http_status = http_status


class RPCNoResultError(RPCError):
    """Reply without a ``result`` member and without an ``error``."""

    def __init__(self, method: str = "") -> None:
        super().__init__(
            f"rpc call {method!r} returned neither result nor error",
            method=method,
            code="rpc-no-result",
        )


class RPCResponseError(RPCError):
    """bitcoind returned a JSON-RPC error object."""

    def __init__(self, rpc_code: int, rpc_message: str, *, method: str = "") -> None:
        super().__init__(
            f"rpc call {method!r} failed ({rpc_code}): {rpc_message}",
            method=method,
            code="rpc-response-error",
        )
        self.rpc_code = rpc_code
        self.rpc_message = rpc_message


def is_duplicate_seed_error(exc: RPCError) -> bool:
    """True if ``exc`` is bitcoind refusing a seed it already holds."""
    return (
        isinstance(exc, RPCResponseError)
        and exc.rpc_code == RPC_WALLET_ERROR
        and exc.rpc_message == DUPLICATE_SEED_MESSAGE
    )


def absorb_sethdseed_error(exc: RPCError) -> None:
    """Map a ``sethdseed`` failure to success or re-raise it.

    The no-result transport anomaly and the duplicate-seed error both mean
    the backend holds the seed; anything else propagates unchanged.
    """
    if isinstance(exc, RPCNoResultError) or is_duplicate_seed_error(exc):
        return
    raise exc
