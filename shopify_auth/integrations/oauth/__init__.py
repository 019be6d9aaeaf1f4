"""OAuth2 integration package for the Shopify strategy."""

from .base import AuthorizationRequest, OAuth2Provider, ProviderConfig, TokenResult, UserProfile
from .exceptions import (
    ConfigError,
    InvalidHmacError,
    MissingCodeError,
    OAuth2Error,
    OAuthError,
    StateMismatchError,
    TransportError,
    UnauthorizedError,
)
from .factory import ShopifyProviderFactory
from .providers.shopify import ShopifyOAuth2Provider
from .strategy import ShopifyStrategy, map_credentials, map_profile

__all__ = [
    "AuthorizationRequest",
    "ConfigError",
    "InvalidHmacError",
    "MissingCodeError",
    "OAuth2Error",
    "OAuth2Provider",
    "OAuthError",
    "ProviderConfig",
    "ShopifyOAuth2Provider",
    "ShopifyProviderFactory",
    "ShopifyStrategy",
    "StateMismatchError",
    "TokenResult",
    "TransportError",
    "UnauthorizedError",
    "UserProfile",
    "map_credentials",
    "map_profile",
]
