"""Request and callback phases of the Shopify authentication strategy.

The flow is linear and holds no state between calls::

    handle_request -> (user authorizes on Shopify) -> handle_callback
        -> exchange_code_for_tokens -> get_user_info -> AuthResult

Each stage hands an immutable value to the next one. Anything that must
survive between the request and the callback (the ``state`` that was sent,
for instance) belongs to the caller, which passes it back in as
``expected_state``::

    state = generate_state()
    session["shopify_state"] = state
    url = strategy.handle_request({"shop": shop, "state": state})
    ...
    result = await strategy.handle_callback(
        callback_params, expected_state=session.pop("shopify_state")
    )
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from shopify_auth.integrations.oauth.base import (
    AuthorizationRequest,
    OAuth2Provider,
    TokenResult,
    UserProfile,
)
from shopify_auth.integrations.oauth.exceptions import (
    MissingCodeError,
    OAuth2Error,
    TransportError,
)
from shopify_auth.integrations.oauth.security import verify_hmac, verify_state
from shopify_auth.schemas.auth import (
    AuthFailure,
    AuthResult,
    AuthSuccess,
    Credentials,
    Extra,
    Info,
)

logger = logging.getLogger(__name__)

# Profile fields lifted into Info; url fields are grouped under Info.urls.
_INFO_FIELDS = {
    "name": "name",
    "login": "nickname",
    "email": "email",
    "location": "location",
    "phone": "phone",
    "description": "description",
}
_URL_FIELDS = {
    "avatar_url": "avatar_url",
    "html_url": "html_url",
    "url": "api_url",
    "blog": "blog",
    "domain": "domain",
    "myshopify_domain": "myshopify_domain",
}
_LOCATION_PARTS = ("city", "province", "country_name")


def split_scopes(scope: Optional[str]) -> list[str]:
    """Split a comma separated scope string, dropping empty entries."""
    if not scope:
        return []
    return [part.strip() for part in scope.split(",") if part.strip()]


def map_credentials(token: TokenResult) -> Credentials:
    """Build the credentials section from a token."""
    return Credentials(
        token=token.access_token,
        refresh_token=token.refresh_token,
        token_type=token.token_type,
        expires=token.expires_at is not None,
        expires_at=token.expires_at,
        scopes=split_scopes(token.scope),
    )


def uid(profile: UserProfile, uid_field: str) -> Optional[str]:
    """Fetch the unique identifier from the profile, stringified."""
    value = profile.get(uid_field)
    return None if value is None else str(value)


def map_profile(profile: UserProfile, uid_field: str = "login") -> Info:
    """Fetch the fields to populate the info section.

    Fields that are not mapped are kept under ``extra_fields`` so nothing the
    provider returned is lost.
    """
    consumed = set(_INFO_FIELDS) | set(_URL_FIELDS)
    values: dict[str, Any] = {}
    for source, target in _INFO_FIELDS.items():
        if profile.get(source) is not None:
            values[target] = str(profile[source])

    # Shopify shops carry an address instead of a location string.
    if "location" not in values:
        parts = [str(profile[key]) for key in _LOCATION_PARTS if profile.get(key)]
        if parts:
            values["location"] = ", ".join(parts)
            consumed.update(_LOCATION_PARTS)

    urls = {
        target: str(profile[source])
        for source, target in _URL_FIELDS.items()
        if profile.get(source) is not None
    }

    extra_fields = {key: value for key, value in profile.items() if key not in consumed}

    return Info(
        uid=uid(profile, uid_field),
        urls=urls,
        extra_fields=extra_fields,
        **values,
    )


def build_extra(token: TokenResult, profile: UserProfile) -> Extra:
    """Store the raw token and profile obtained during the callback."""
    return Extra(raw_info={"token": token.as_dict(), "user": dict(profile)})


class ShopifyStrategy:
    """Shopify authentication strategy."""

    provider_name = "shopify"

    def __init__(self, provider: OAuth2Provider, verify_hmac: bool = False):
        self.provider = provider
        self.verify_hmac = verify_hmac

    def _provider_for(self, shop: Optional[str]) -> OAuth2Provider:
        if not shop:
            return self.provider
        return type(self.provider)(self.provider.config.with_shop(shop))

    def handle_request(
        self,
        params: Mapping[str, str],
        callback_url: Optional[str] = None,
    ) -> str:
        """Build the URL of the Shopify authorization page.

        ``params`` may carry ``scope`` (comma separated) and ``state``
        overrides, and a ``shop`` to authorize against instead of the
        configured one. The configured redirect URI wins over
        ``callback_url``.

        Raises:
            InvalidShopError: if ``params`` carries a shop that is not a
                myshopify.com shop.
            ConfigError: if the provider cannot build the URL.
        """
        provider = self._provider_for(params.get("shop"))
        scopes = split_scopes(params.get("scope")) or list(provider.config.default_scopes)
        request = AuthorizationRequest(
            scopes=tuple(scopes),
            redirect_uri=provider.config.redirect_uri or callback_url,
            state=params.get("state") or None,
        )
        url = provider.get_authorization_url(request)
        logger.info("Redirecting to Shopify authorization for %s", provider.config.shop_domain)
        return url

    async def handle_callback(
        self,
        params: Mapping[str, str],
        expected_state: Optional[str] = None,
    ) -> AuthResult:
        """Handle the callback from Shopify.

        Returns an ``AuthFailure`` for every error; nothing is raised. No
        outbound call is made when the code is missing, the state does not
        match ``expected_state`` or the HMAC check fails.
        """
        code = params.get("code")
        if not code:
            return self._failure(MissingCodeError("No code received"))

        try:
            if expected_state is not None:
                verify_state(expected_state, params.get("state"))
            provider = self._provider_for(params.get("shop"))
            if self.verify_hmac:
                verify_hmac(params, provider.config.client_secret)

            token = await provider.exchange_code_for_tokens(code)
            profile = await provider.get_user_info(token)
        except OAuth2Error as e:
            return self._failure(e)

        try:
            info = map_profile(profile, provider.config.uid_field)
            result = AuthSuccess(
                provider=self.provider_name,
                strategy=type(self).__name__,
                uid=info.uid,
                credentials=map_credentials(token),
                info=info,
                extra=build_extra(token, profile),
            )
        except (ValidationError, TypeError, AttributeError) as e:
            return self._failure(TransportError(f"Unexpected Shopify response: {e}"))

        logger.info("Shopify authentication succeeded for uid=%s", result.uid)
        return result

    def _failure(self, error: OAuth2Error) -> AuthFailure:
        logger.warning("Shopify authentication failed (%s): %s", error.kind, error)
        return AuthFailure(
            provider=self.provider_name,
            strategy=type(self).__name__,
            kind=error.kind,
            message=str(error),
        )


__all__ = [
    "ShopifyStrategy",
    "build_extra",
    "map_credentials",
    "map_profile",
    "split_scopes",
    "uid",
]
