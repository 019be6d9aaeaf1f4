"""Application configuration using Pydantic settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings sourced from environment variables and .env files."""

    # Shopify OAuth Configuration
    shopify_api_key: str = Field(
        default="",
        alias="SHOPIFY_API_KEY",
    )
    shopify_secret: str = Field(
        default="",
        alias="SHOPIFY_SECRET",
    )
    shopify_shop: str = Field(
        default="",
        alias="SHOPIFY_SHOP",
        description="Shop name or <name>.myshopify.com domain used when the request carries no shop.",
    )
    shopify_redirect_uri: Optional[str] = Field(
        default=None,
        alias="SHOPIFY_REDIRECT_URI",
        description="Callback URL registered with Shopify. Derived from the request when unset.",
    )
    shopify_uid_field: str = Field(
        default="login",
        alias="SHOPIFY_UID_FIELD",
    )
    shopify_default_scope: str = Field(
        default="read_products,read_customers,read_orders",
        alias="SHOPIFY_DEFAULT_SCOPE",
    )

    shopify_authorize_url: str = Field(
        default="https://{shop}/admin/oauth/authorize",
        alias="SHOPIFY_AUTHORIZE_URL",
    )
    shopify_token_url: str = Field(
        default="https://{shop}/admin/oauth/access_token",
        alias="SHOPIFY_TOKEN_URL",
    )
    shopify_profile_url: str = Field(
        default="https://{shop}/admin/shop.json",
        alias="SHOPIFY_PROFILE_URL",
    )
    shopify_profile_envelope: str = Field(
        default="shop",
        alias="SHOPIFY_PROFILE_ENVELOPE",
        description="Key the profile endpoint wraps its payload in (empty to disable unwrapping).",
    )
    shopify_http_timeout_seconds: float = Field(
        default=10.0,
        alias="SHOPIFY_HTTP_TIMEOUT_SECONDS",
    )
    shopify_verify_hmac: bool = Field(
        default=False,
        alias="SHOPIFY_VERIFY_HMAC",
        description="Reject callbacks whose query string is not signed with the app secret.",
    )

    # HTTP surface
    auth_rate_limit: str = Field(
        default="20/minute",
        alias="AUTH_RATE_LIMIT",
    )
    rate_limit_enabled: bool = Field(
        default=True,
        alias="RATE_LIMIT_ENABLED",
    )
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()

__all__ = ["Settings", "settings"]
