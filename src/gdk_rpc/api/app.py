"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from gdk_rpc import __version__
from gdk_rpc.api.routes import router
from gdk_rpc.config.settings import AppConfig
from gdk_rpc.errors.gdk_errors import GDKError
from gdk_rpc.network.credentials import connect
from gdk_rpc.network.registry import NetworkRegistry
from gdk_rpc.wallet.session import WalletSession

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import Request

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Hold one backend connection for the application's lifetime."""
    config: AppConfig = app.state.config
    network = app.state.registry.require_network(config.network)
    session = WalletSession(await connect(network, timeout=config.bitcoind.timeout), network)
    app.state.session = session
    logger.info("Serving %s wallet at %s", network.id, network.rpc_url)
    try:
        yield
    finally:
        app.state.session = None
        await session.close()
        logger.info("Closed %s wallet session", network.id)


async def _render_gdk_error(request: Request, exc: GDKError) -> JSONResponse:
    return JSONResponse({"code": exc.code, "message": exc.message}, status_code=exc.status_code)


def create_app(
    *, config: AppConfig | None = None, registry: NetworkRegistry | None = None
) -> FastAPI:
    """Build the HTTP surface.

    Args:
        config: Settings; read from the environment when omitted.
        registry: Network registry; derived from *config* when omitted.

    The wallet session is opened by the lifespan hook, so requests to the
    wallet routes fail with 503 until the application has started.
    """
    config = config or AppConfig()
    app = FastAPI(
        title="gdk-rpc",
        version=__version__,
        description="GDK wallet adapter for a bitcoind RPC backend",
        debug=config.debug,
        lifespan=_lifespan,
    )
    app.state.config = config
    app.state.registry = registry if registry is not None else NetworkRegistry.from_config(config)
    app.state.session = None

    app.add_exception_handler(GDKError, _render_gdk_error)
    app.include_router(router)
    return app
