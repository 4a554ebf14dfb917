"""Admin request authentication."""

from catalog_service.infra.auth.signature import (
    ExpiredSignatureError,
    InvalidShopError,
    InvalidSignatureError,
    compute_signature,
    verify_signed_params,
)

__all__ = [
    "ExpiredSignatureError",
    "InvalidShopError",
    "InvalidSignatureError",
    "compute_signature",
    "verify_signed_params",
]
