"""FastAPI dependency injection helpers.

The registry and the wallet session live on ``app.state``; they are set up
by the lifespan hook (or directly by tests).
"""

from __future__ import annotations

from fastapi import Request

from gdk_rpc.errors.definitions import ErrSessionNotReady
from gdk_rpc.network.registry import NetworkRegistry  # noqa: TC001
from gdk_rpc.wallet.session import WalletSession  # noqa: TC001


def get_registry(request: Request) -> NetworkRegistry:
    """Retrieve the network registry from ``app.state``."""
    return request.app.state.registry


def get_session(request: Request) -> WalletSession:
    """Retrieve the wallet session from ``app.state``.

    Raises:
        GDKError: 503 if the backend connection has not been opened.
    """
    session: WalletSession | None = getattr(request.app.state, "session", None)
    if session is None:
        raise ErrSessionNotReady
    return session
