"""OAuth2 provider implementations."""

from .shopify import ShopifyOAuth2Provider

__all__ = ["ShopifyOAuth2Provider"]
