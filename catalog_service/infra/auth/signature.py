"""Verification of Shopify-signed admin request parameters.

Shopify signs the query string it sends when it loads an embedded app page:
every parameter except ``hmac`` is sorted by key, rendered as ``key=value``,
joined with ``&`` and signed with HMAC-SHA256 using the app's API secret.
"""

from __future__ import annotations

import hashlib
import hmac
import re
import time
from collections.abc import Iterable

from catalog_service.core.exceptions import UnauthorizedException

SHOP_DOMAIN_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]*\.myshopify\.com$")

# Tolerated clock drift for timestamps slightly in the future
CLOCK_SKEW_SECONDS = 60


class InvalidSignatureError(UnauthorizedException):
    """The request's ``hmac`` parameter is missing or does not match."""

    def __init__(self, detail: str = "Request signature is invalid") -> None:
        super().__init__(detail=detail, type="invalid-signature")


class ExpiredSignatureError(UnauthorizedException):
    """The signed ``timestamp`` is outside the accepted window."""

    def __init__(self, detail: str = "Signed request has expired") -> None:
        super().__init__(detail=detail, type="expired-signature")


class InvalidShopError(UnauthorizedException):
    """The ``shop`` parameter is missing or not a myshopify.com domain."""

    def __init__(self, shop: str | None) -> None:
        super().__init__(
            detail="Missing or invalid shop domain",
            type="invalid-shop",
            extra={"shop": shop} if shop else None,
        )


def signing_message(params: Iterable[tuple[str, str]]) -> str:
    """Build the message Shopify signs from query parameters.

    Repeated keys (``ids[]=1&ids[]=2``) collapse to ``ids=["1", "2"]``.
    """
    grouped: dict[str, list[str]] = {}
    for key, value in params:
        if key in ("hmac", "signature"):
            continue
        grouped.setdefault(key.removesuffix("[]"), []).append(value)

    parts = []
    for key in sorted(grouped):
        values = grouped[key]
        if len(values) == 1:
            rendered = values[0]
        else:
            rendered = "[" + ", ".join(f'"{v}"' for v in values) + "]"
        parts.append(f"{key}={rendered}")
    return "&".join(parts)


def compute_signature(params: Iterable[tuple[str, str]], secret: str) -> str:
    """Hex HMAC-SHA256 of the signing message."""
    return hmac.new(
        secret.encode("utf-8"),
        signing_message(params).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signed_params(
    params: list[tuple[str, str]],
    secret: str,
    max_age_seconds: int,
    now: float | None = None,
) -> str:
    """Verify signed admin parameters and return the shop domain.

    Args:
        params: Query parameters as (key, value) pairs, repeats preserved.
        secret: App API secret.
        max_age_seconds: Maximum accepted age of ``timestamp``.
        now: Current UNIX time (defaults to ``time.time()``).

    Returns:
        The verified, lower-cased shop domain.

    Raises:
        InvalidShopError: ``shop`` missing or malformed.
        InvalidSignatureError: ``hmac`` missing or wrong.
        ExpiredSignatureError: ``timestamp`` missing, malformed or out of window.
    """
    values = dict(params)

    shop = values.get("shop")
    if not shop or not SHOP_DOMAIN_RE.match(shop):
        raise InvalidShopError(shop)

    provided = values.get("hmac")
    if not provided:
        raise InvalidSignatureError("Request is not signed")
    expected = compute_signature(params, secret)
    if not hmac.compare_digest(expected.encode("ascii"), provided.lower().encode("utf-8")):
        raise InvalidSignatureError()

    try:
        timestamp = int(values.get("timestamp", ""))
    except ValueError:
        raise ExpiredSignatureError("Signed request has no valid timestamp") from None

    current = time.time() if now is None else now
    if timestamp > current + CLOCK_SKEW_SECONDS or current - timestamp > max_age_seconds:
        raise ExpiredSignatureError()

    return shop.lower()
