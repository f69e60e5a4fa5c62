"""Request/response schemas for the HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MnemonicRequest(BaseModel):
    """Body of ``/wallet/register`` and ``/wallet/login``."""

    mnemonic: str = Field(..., min_length=1, description="BIP39 English mnemonic phrase")


class StatusResponse(BaseModel):
    """Generic success acknowledgement."""

    status: str = "ok"
