"""Network and wallet endpoints."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from gdk_rpc.api.dependencies import get_registry, get_session
from gdk_rpc.api.schemas import MnemonicRequest, StatusResponse
from gdk_rpc.network.registry import NetworkRegistry  # noqa: TC001
from gdk_rpc.wallet.session import WalletSession  # noqa: TC001

router = APIRouter()


@router.get("/health", tags=["base"])
async def health() -> StatusResponse:
    return StatusResponse()


# ---------------------------------------------------------------------------
# Networks
# ---------------------------------------------------------------------------


@router.get("/networks", tags=["network"])
async def list_networks(
    registry: Annotated[NetworkRegistry, Depends(get_registry)],
) -> dict[str, Any]:
    """All configured backend networks, keyed by id."""
    return {net_id: net.to_dict() for net_id, net in registry.list_networks().items()}


@router.get("/networks/{network_id}", tags=["network"])
async def get_network(
    network_id: str,
    registry: Annotated[NetworkRegistry, Depends(get_registry)],
) -> dict[str, Any]:
    """A single backend network."""
    return registry.require_network(network_id).to_dict()


# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------


@router.post("/wallet/register", tags=["wallet"])
async def register(
    body: MnemonicRequest,
    session: Annotated[WalletSession, Depends(get_session)],
) -> StatusResponse:
    """Install the mnemonic's seed in the backend wallet."""
    await session.register(body.mnemonic)
    return StatusResponse()


@router.post("/wallet/login", tags=["wallet"])
async def login(
    body: MnemonicRequest,
    session: Annotated[WalletSession, Depends(get_session)],
) -> StatusResponse:
    """Alias of ``/wallet/register``."""
    await session.login(body.mnemonic)
    return StatusResponse()


@router.get("/wallet/account", tags=["wallet"])
async def get_account(
    session: Annotated[WalletSession, Depends(get_session)],
) -> dict[str, Any]:
    account = await session.get_account()
    return account.to_dict()


@router.get("/wallet/transactions", tags=["wallet"])
async def get_transactions(
    session: Annotated[WalletSession, Depends(get_session)],
    page: Annotated[int, Query(ge=0)] = 0,
) -> dict[str, Any]:
    result = await session.get_transactions(page)
    return result.to_dict()
