"""Verification helpers owned by the caller of the OAuth flow."""

from __future__ import annotations

import hashlib
import hmac
import re
import secrets
from typing import Mapping, Optional

from shopify_auth.integrations.oauth.exceptions import (
    ConfigError,
    InvalidHmacError,
    StateMismatchError,
)

MYSHOPIFY_SUFFIX = ".myshopify.com"

_SHOP_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9\-]*$")


def normalize_shop_domain(shop: Optional[str]) -> str:
    """Turn ``acme`` or ``https://acme.myshopify.com/`` into ``acme.myshopify.com``.

    Raises:
        ConfigError: if the value is empty or not a myshopify.com shop.
    """
    if not shop or not shop.strip():
        raise ConfigError("Shopify shop domain is not configured")

    value = shop.strip().lower()
    for prefix in ("https://", "http://"):
        if value.startswith(prefix):
            value = value[len(prefix):]
    value = value.rstrip("/")

    name = value[: -len(MYSHOPIFY_SUFFIX)] if value.endswith(MYSHOPIFY_SUFFIX) else value
    if not _SHOP_NAME_RE.match(name):
        raise ConfigError(f"Invalid Shopify shop domain: {shop!r}")
    return f"{name}{MYSHOPIFY_SUFFIX}"


def generate_state() -> str:
    """Generate secure state parameter for OAuth flow."""
    return secrets.token_urlsafe(32)


def verify_state(expected: str, received: Optional[str]) -> None:
    """Check the callback state against the one sent with the authorize redirect."""
    if not received or not hmac.compare_digest(expected, received):
        raise StateMismatchError("Cross-Site Request Forgery attack detected: state mismatch")


def _escape(value: str, is_key: bool = False) -> str:
    # "%" first so the escapes added below are not escaped again.
    value = str(value).replace("%", "%25").replace("&", "%26")
    if is_key:
        value = value.replace("=", "%3D")
    return value


def compute_hmac(params: Mapping[str, str], secret: str) -> str:
    """Sign a callback query the way Shopify does.

    Shopify signs all query params except hmac itself; order is lexicographic.
    "%" and "&" are percent-encoded in keys and values, "=" in keys only.
    """
    items = sorted(
        (_escape(k, is_key=True), _escape(v))
        for k, v in params.items()
        if k not in ("hmac", "signature")
    )
    message = "&".join(f"{k}={v}" for k, v in items).encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_hmac(params: Mapping[str, str], secret: str) -> None:
    """Raise InvalidHmacError unless ``params`` carries a valid Shopify signature."""
    received = params.get("hmac")
    if not received:
        raise InvalidHmacError("Callback is not signed")
    if not secret:
        raise ConfigError("Shopify secret is not configured")
    if not hmac.compare_digest(compute_hmac(params, secret), received):
        raise InvalidHmacError("Callback signature does not match")


__all__ = [
    "compute_hmac",
    "generate_state",
    "normalize_shop_domain",
    "verify_hmac",
    "verify_state",
]
