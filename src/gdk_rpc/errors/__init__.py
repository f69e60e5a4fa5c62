"""gdk-rpc error types."""

from gdk_rpc.errors.gdk_errors import (
    BackendError,
    ConfigurationError,
    DataShapeError,
    GDKError,
    NotFoundError,
    ValidationError,
)
from gdk_rpc.errors.rpc_errors import (
    RPCError,
    RPCNoResultError,
    RPCResponseError,
    RPCTransportError,
)

__all__ = [
    "BackendError",
    "ConfigurationError",
    "DataShapeError",
    "GDKError",
    "NotFoundError",
    "RPCError",
    "RPCNoResultError",
    "RPCResponseError",
    "RPCTransportError",
    "ValidationError",
]
