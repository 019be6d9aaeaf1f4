"""Shopify OAuth API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from shopify_auth.core.config import settings
from shopify_auth.integrations.oauth.exceptions import InvalidShopError
from shopify_auth.integrations.oauth.factory import ShopifyProviderFactory
from shopify_auth.integrations.oauth.strategy import ShopifyStrategy
from shopify_auth.schemas.auth import AuthFailure, AuthSuccess

router = APIRouter(tags=["oauth"])
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

FAILURE_STATUS = {
    "missing_code": status.HTTP_400_BAD_REQUEST,
    "invalid_shop": status.HTTP_400_BAD_REQUEST,
    "csrf_attack": status.HTTP_400_BAD_REQUEST,
    "invalid_hmac": status.HTTP_400_BAD_REQUEST,
    "oauth_error": status.HTTP_400_BAD_REQUEST,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "transport_error": status.HTTP_502_BAD_GATEWAY,
    "config_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_strategy() -> ShopifyStrategy:
    """Build the strategy from settings. Raises ConfigError when unconfigured."""
    provider = ShopifyProviderFactory.create_provider()
    return ShopifyStrategy(provider, verify_hmac=settings.shopify_verify_hmac)


@router.get("/shopify", name="shopify_request")
@limiter.limit(settings.auth_rate_limit)
async def shopify_request(
    request: Request,
    strategy: ShopifyStrategy = Depends(get_strategy),
) -> RedirectResponse:
    """Redirect to the Shopify authorization page.

    Accepts ``shop``, ``scope`` and ``state`` query parameters.
    """
    try:
        url = strategy.handle_request(
            dict(request.query_params),
            callback_url=str(request.url_for("shopify_callback")),
        )
    except InvalidShopError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return RedirectResponse(url=url)


@router.get("/shopify/callback", name="shopify_callback", response_model=AuthSuccess)
@limiter.limit(settings.auth_rate_limit)
async def shopify_callback(
    request: Request,
    strategy: ShopifyStrategy = Depends(get_strategy),
):
    """Handle the redirect back from Shopify and return the auth result."""
    result = await strategy.handle_callback(dict(request.query_params))

    if isinstance(result, AuthFailure):
        return JSONResponse(
            status_code=FAILURE_STATUS.get(result.kind, status.HTTP_400_BAD_REQUEST),
            content=result.model_dump(),
        )
    return result


__all__ = ["router", "limiter", "get_strategy"]
