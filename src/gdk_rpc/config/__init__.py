"""Configuration — pydantic-settings models."""

from gdk_rpc.config.settings import AppConfig, BitcoindConfig, NetworkConfig, NetworkKind

__all__ = ["AppConfig", "BitcoindConfig", "NetworkConfig", "NetworkKind"]
