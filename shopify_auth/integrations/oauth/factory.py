"""Factory for creating the Shopify OAuth2 provider from settings."""

from __future__ import annotations

from typing import Optional

from shopify_auth.core.config import settings
from shopify_auth.integrations.oauth.base import ProviderConfig
from shopify_auth.integrations.oauth.exceptions import ConfigError
from shopify_auth.integrations.oauth.providers.shopify import ShopifyOAuth2Provider
from shopify_auth.integrations.oauth.security import normalize_shop_domain


class ShopifyProviderFactory:
    """Factory for creating Shopify OAuth2 providers."""

    @classmethod
    def create_provider(cls, shop: Optional[str] = None) -> ShopifyOAuth2Provider:
        """Create a provider, optionally bound to a shop other than the configured one."""
        if not cls._is_provider_configured():
            raise ConfigError(
                "Provider 'shopify' is not configured. "
                "Please set SHOPIFY_API_KEY and SHOPIFY_SECRET."
            )

        config = cls._get_provider_config()
        if shop:
            config = config.with_shop(shop)
        return ShopifyOAuth2Provider(config)

    @classmethod
    def _get_provider_config(cls) -> ProviderConfig:
        """Resolve the immutable provider configuration from settings."""
        shop_domain = ""
        if settings.shopify_shop:
            shop_domain = normalize_shop_domain(settings.shopify_shop)

        scopes = tuple(
            scope.strip()
            for scope in settings.shopify_default_scope.split(",")
            if scope.strip()
        )
        return ProviderConfig(
            client_id=settings.shopify_api_key,
            client_secret=settings.shopify_secret,
            shop_domain=shop_domain,
            authorize_url=settings.shopify_authorize_url,
            token_url=settings.shopify_token_url,
            profile_url=settings.shopify_profile_url,
            redirect_uri=settings.shopify_redirect_uri or None,
            default_scopes=scopes,
            uid_field=settings.shopify_uid_field,
            profile_envelope=settings.shopify_profile_envelope or None,
            timeout=settings.shopify_http_timeout_seconds,
        )

    @classmethod
    def _is_provider_configured(cls) -> bool:
        """Check if provider has required credentials configured."""
        return bool(settings.shopify_api_key and settings.shopify_secret)

    @classmethod
    def is_configured(cls) -> bool:
        return cls._is_provider_configured()


__all__ = ["ShopifyProviderFactory"]
