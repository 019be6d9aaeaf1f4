"""Shopify OAuth2 provider implementation."""

from __future__ import annotations

import httpx
import logging
import time
from types import MappingProxyType
from typing import Any, Dict
from urllib.parse import urlencode

from shopify_auth.integrations.oauth.base import (
    AuthorizationRequest,
    OAuth2Provider,
    TokenResult,
    UserProfile,
)
from shopify_auth.integrations.oauth.exceptions import (
    ConfigError,
    OAuthError,
    TransportError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# Keys lifted into TokenResult fields; everything else lands in other_params.
_TOKEN_FIELDS = ("access_token", "token_type", "expires_in", "refresh_token")


class ShopifyOAuth2Provider(OAuth2Provider):
    """Shopify OAuth2 provider implementation."""

    @property
    def provider_name(self) -> str:
        return "shopify"

    def get_authorization_url(self, request: AuthorizationRequest) -> str:
        """Generate Shopify authorization URL.

        No network call is made. The scope list is comma-joined, which is the
        separator Shopify expects.

        Raises:
            ConfigError: if the client id or the shop domain is missing.
        """
        if not self.config.client_id:
            raise ConfigError("Shopify client_id is not configured")
        if not self.config.shop_domain:
            raise ConfigError("Shopify shop domain is not configured")

        params = {
            "client_id": self.config.client_id,
            "scope": ",".join(request.scopes),
        }
        redirect_uri = request.redirect_uri or self.config.redirect_uri
        if redirect_uri:
            params["redirect_uri"] = redirect_uri
        if request.state:
            params["state"] = request.state
        return f"{self.config.authorize_endpoint}?{urlencode(params)}"

    async def exchange_code_for_tokens(self, code: str) -> TokenResult:
        """Exchange authorization code for a Shopify access token."""
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            try:
                response = await client.post(
                    self.config.token_endpoint,
                    headers={"Accept": "application/json"},
                    data={
                        "client_id": self.config.client_id,
                        "client_secret": self.config.client_secret,
                        "code": code,
                    },
                )
            except httpx.HTTPError as e:
                raise TransportError(f"Failed to exchange code: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and not data.get("access_token") and data.get("error"):
            raise OAuthError(str(data["error"]), data.get("error_description"))

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Token endpoint returned HTTP {response.status_code}"
            )
        if not isinstance(data, dict):
            raise TransportError("Token endpoint returned an unparsable body")
        access_token = data.get("access_token")
        if not access_token:
            raise OAuthError("missing_token", "No access token received")
        if not isinstance(access_token, str):
            raise OAuthError("invalid_token", "access_token is not a string")
        for key in ("scope", "token_type", "refresh_token"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise OAuthError("invalid_token", f"{key} is not a string")

        return self._token_from_payload(data)

    async def get_user_info(self, token: TokenResult) -> UserProfile:
        """Get the Shopify profile for the access token."""
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            try:
                response = await client.get(
                    self.config.profile_endpoint,
                    headers={
                        "Authorization": f"Bearer {token.access_token}",
                        "X-Shopify-Access-Token": token.access_token,
                        "Accept": "application/json",
                    },
                )
            except httpx.HTTPError as e:
                raise TransportError(f"Failed to get user info: {str(e)}")

        status_code = response.status_code
        if status_code == 401:
            raise UnauthorizedError("unauthorized")
        if not 200 <= status_code < 400:
            raise TransportError(f"Profile endpoint returned HTTP {status_code}")

        try:
            body = response.json()
        except ValueError:
            raise TransportError("Profile endpoint returned an unparsable body")
        if not isinstance(body, dict):
            raise TransportError("Profile endpoint returned an unexpected body")

        envelope = self.config.profile_envelope
        if envelope and isinstance(body.get(envelope), dict):
            body = body[envelope]
        return MappingProxyType(dict(body))

    @staticmethod
    def _token_from_payload(data: Dict[str, Any]) -> TokenResult:
        expires_at = None
        expires_in = data.get("expires_in")
        if expires_in not in (None, ""):
            try:
                expires_at = int(time.time()) + int(expires_in)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric expires_in from Shopify: %r", expires_in)

        return TokenResult(
            access_token=data["access_token"],
            token_type=data.get("token_type") or "Bearer",
            expires_at=expires_at,
            refresh_token=data.get("refresh_token"),
            other_params={k: v for k, v in data.items() if k not in _TOKEN_FIELDS},
        )


__all__ = ["ShopifyOAuth2Provider"]
