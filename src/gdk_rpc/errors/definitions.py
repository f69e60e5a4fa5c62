"""Pre-defined error instances shared across modules."""

from __future__ import annotations

from gdk_rpc.errors.gdk_errors import (
    ConfigurationError,
    GDKError,
    ValidationError,
)

# -- Configuration ---------------------------------------------------------

ErrMissingCredentials = ConfigurationError("missing rpc credentials", code="missing-credentials")

# -- Validation ------------------------------------------------------------

ErrInvalidMnemonic = ValidationError("invalid mnemonic phrase", code="invalid-mnemonic")
ErrInvalidTxCategory = ValidationError("invalid tx category", code="invalid-tx-category")
ErrInvalidPage = ValidationError("page must be a non-negative integer", code="invalid-page")

# -- Lifecycle -------------------------------------------------------------

ErrSessionNotReady = GDKError("wallet session is not connected", status_code=503, code="not-ready")
