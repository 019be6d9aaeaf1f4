"""OAuth2-specific exceptions.

Every error carries a ``kind`` tag so callers can turn it into an
``AuthFailure`` without inspecting the class hierarchy.
"""


class OAuth2Error(Exception):
    """Base OAuth2 error."""

    kind = "oauth2_error"


class ConfigError(OAuth2Error):
    """Raised when the provider is missing required configuration."""

    kind = "config_error"


class InvalidShopError(OAuth2Error):
    """Raised when a shop supplied with the request is not a myshopify.com shop."""

    kind = "invalid_shop"


class MissingCodeError(OAuth2Error):
    """Raised when the callback carries no authorization code."""

    kind = "missing_code"


class OAuthError(OAuth2Error):
    """Raised when the provider answers with an explicit OAuth error."""

    kind = "oauth_error"

    def __init__(self, error: str, description: str | None = None):
        self.error = error
        self.description = description
        message = f"{error}: {description}" if description else error
        super().__init__(message)


class UnauthorizedError(OAuth2Error):
    """Raised when the profile endpoint rejects the access token."""

    kind = "unauthorized"


class TransportError(OAuth2Error):
    """Raised on network failures, timeouts and unclassified HTTP errors."""

    kind = "transport_error"


class StateMismatchError(OAuth2Error):
    """Raised when the callback state does not match the one that was sent."""

    kind = "csrf_attack"


class InvalidHmacError(OAuth2Error):
    """Raised when the callback query string is not signed by Shopify."""

    kind = "invalid_hmac"


__all__ = [
    "OAuth2Error",
    "ConfigError",
    "InvalidShopError",
    "MissingCodeError",
    "OAuthError",
    "UnauthorizedError",
    "TransportError",
    "StateMismatchError",
    "InvalidHmacError",
]
