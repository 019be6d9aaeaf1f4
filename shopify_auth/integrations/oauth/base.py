"""Abstract base classes and value types for the OAuth2 flow."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from shopify_auth.integrations.oauth.exceptions import ConfigError, InvalidShopError
from shopify_auth.integrations.oauth.security import normalize_shop_domain

SHOP_PLACEHOLDER = "{shop}"

UserProfile = Mapping[str, Any]


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ProviderConfig:
    """OAuth2 configuration for a provider.

    URL fields are templates; ``{shop}`` is replaced with ``shop_domain``.
    """

    client_id: str
    client_secret: str
    shop_domain: str
    authorize_url: str
    token_url: str
    profile_url: str
    redirect_uri: Optional[str] = None
    default_scopes: Tuple[str, ...] = ()
    uid_field: str = "login"
    profile_envelope: Optional[str] = "shop"
    timeout: float = 10.0

    def with_shop(self, shop: str) -> "ProviderConfig":
        """Return a copy bound to a shop supplied by the caller.

        Raises:
            InvalidShopError: if ``shop`` is not a myshopify.com shop.
        """
        try:
            shop_domain = normalize_shop_domain(shop)
        except ConfigError as e:
            raise InvalidShopError(str(e)) from e
        return dataclasses.replace(self, shop_domain=shop_domain)

    def resolve(self, template: str) -> str:
        """Interpolate the shop domain into a URL template."""
        if SHOP_PLACEHOLDER in template and not self.shop_domain:
            raise ConfigError("Shopify shop domain is not configured")
        return template.replace(SHOP_PLACEHOLDER, self.shop_domain)

    @property
    def authorize_endpoint(self) -> str:
        return self.resolve(self.authorize_url)

    @property
    def token_endpoint(self) -> str:
        return self.resolve(self.token_url)

    @property
    def profile_endpoint(self) -> str:
        return self.resolve(self.profile_url)


@dataclass(frozen=True)
class AuthorizationRequest:
    """Parameters of a single authorize redirect."""

    scopes: Tuple[str, ...]
    redirect_uri: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class TokenResult:
    """OAuth2 token response."""

    access_token: str
    token_type: str = "Bearer"
    expires_at: Optional[int] = None
    refresh_token: Optional[str] = None
    other_params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.access_token, str) or not self.access_token:
            raise ValueError("access_token must be a non-empty string")
        object.__setattr__(self, "other_params", _freeze(self.other_params))

    @property
    def scope(self) -> Optional[str]:
        """Scope string granted by the provider, if it sent one."""
        return self.other_params.get("scope")

    def as_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "refresh_token": self.refresh_token,
            "other_params": dict(self.other_params),
        }


class OAuth2Provider(ABC):
    """Abstract base class for OAuth2 providers."""

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique provider identifier."""
        pass

    @abstractmethod
    def get_authorization_url(self, request: AuthorizationRequest) -> str:
        """Generate authorization URL."""
        pass

    @abstractmethod
    async def exchange_code_for_tokens(self, code: str) -> TokenResult:
        """Exchange authorization code for tokens."""
        pass

    @abstractmethod
    async def get_user_info(self, token: TokenResult) -> UserProfile:
        """Get user information from the provider."""
        pass


__all__ = [
    "AuthorizationRequest",
    "OAuth2Provider",
    "ProviderConfig",
    "TokenResult",
    "UserProfile",
]
