"""gdk-rpc settings.

Sources, strongest first: environment variables (``BITCOIND_*`` for the
built-in regtest node, ``GDKRPC_*`` for the rest, nested with ``__``), then an
optional YAML file named by ``GDKRPC_CONFIG_PATH``, then the defaults below.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class NetworkKind(enum.StrEnum):
    """Bitcoin networks a backend can run on."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    REGTEST = "regtest"

    @property
    def datadir_subdir(self) -> str:
        """Sub-directory of the bitcoind data directory used by this network."""
        return {
            NetworkKind.MAINNET: "",
            NetworkKind.TESTNET: "testnet3",
            NetworkKind.REGTEST: "regtest",
        }[self]


# ---------------------------------------------------------------------------
# Backend connections
# ---------------------------------------------------------------------------


class BitcoindConfig(BaseSettings):
    """Connection settings for the built-in regtest backend."""

    model_config = SettingsConfigDict(
        env_prefix="BITCOIND_",
        case_sensitive=False,
        populate_by_name=True,
    )

    url: str = "http://127.0.0.1:18443"
    datadir: str = Field(
        default="",
        validation_alias=AliasChoices("BITCOIND_DIR", "BITCOIND_DATADIR"),
        description="bitcoind data directory holding the .cookie file",
    )
    user: str = ""
    password: str = ""
    timeout: float = 30.0


class NetworkConfig(BaseModel):
    """An additional backend network declared in YAML or env JSON."""

    id: str
    name: str
    network: NetworkKind = NetworkKind.REGTEST
    rpc_url: str
    rpc_user: str = ""
    rpc_password: str = ""
    rpc_cookie: str = ""
    tx_explorer_url: str = "https://blockstream.info/tx/"


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML mapping; a missing, empty or non-mapping file yields ``{}``."""
    try:
        with Path(path).open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError:
        return {}
    return data if isinstance(data, dict) else {}


def _merge_defaults(explicit: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Fill gaps in ``explicit`` from ``defaults``, recursing into mappings."""
    merged = dict(defaults)
    for key, value in explicit.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_defaults(value, merged[key])
        else:
            merged[key] = value
    return merged


class AppConfig(BaseSettings):
    """Settings for one gdk-rpc process: backends plus the HTTP surface."""

    model_config = SettingsConfigDict(
        env_prefix="GDKRPC_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    version: str = "0.1.0"
    config_path: str = ""
    network: str = Field(
        default="regtest",
        description="Id of the network served by the HTTP surface",
    )

    bitcoind: BitcoindConfig = Field(default_factory=BitcoindConfig)
    networks: list[NetworkConfig] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _apply_config_file(cls, values: dict[str, Any]) -> dict[str, Any]:
        path = values.get("config_path")
        return _merge_defaults(values, _load_yaml(path)) if path else values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Load settings with ``path`` as the YAML layer."""
        return cls(config_path=str(path))
