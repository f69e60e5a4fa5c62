"""GDKError — base exception class and error kinds for all gdk-rpc errors."""

from __future__ import annotations


class GDKError(Exception):
    """Base error for all gdk-rpc operations.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested HTTP status code.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "gdk-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class ConfigurationError(GDKError):
    """Missing or malformed local configuration (credentials, cookie file)."""

    def __init__(self, message: str, *, code: str = "configuration-error") -> None:
        super().__init__(message, status_code=500, code=code)


class ValidationError(GDKError):
    """Invalid input: mnemonic, hex identifiers, categories, page numbers."""

    def __init__(self, message: str, *, code: str = "validation-error") -> None:
        super().__init__(message, status_code=400, code=code)


class NotFoundError(GDKError):
    """A requested entity does not exist."""

    def __init__(self, message: str, *, code: str = "not-found") -> None:
        super().__init__(message, status_code=404, code=code)


class BackendError(GDKError):
    """Failure reported by, or while talking to, the bitcoind backend."""

    def __init__(
        self, message: str, *, status_code: int = 502, code: str = "backend-error"
    ) -> None:
        super().__init__(message, status_code=status_code, code=code)


class DataShapeError(GDKError):
    """A backend response lacks a required field or has the wrong type."""

    def __init__(self, message: str, *, code: str = "data-shape-error") -> None:
        super().__init__(message, status_code=502, code=code)
