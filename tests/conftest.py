"""Shared pytest fixtures for the Shopify auth tests."""

from __future__ import annotations

import asyncio
from collections.abc import Generator

import httpx
import pytest

from shopify_auth import main
from shopify_auth.api.routes.oauth import get_strategy, limiter
from shopify_auth.integrations.oauth.base import ProviderConfig
from shopify_auth.integrations.oauth.providers.shopify import ShopifyOAuth2Provider
from shopify_auth.integrations.oauth.strategy import ShopifyStrategy


class SyncASGITestClient:
    """Synchronous wrapper around httpx.AsyncClient for ASGI apps."""

    def __init__(self, app) -> None:
        transport = httpx.ASGITransport(app=app)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return asyncio.run(self._client.request(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def __enter__(self) -> "SyncASGITestClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        asyncio.run(self._client.aclose())


@pytest.fixture()
def provider_config() -> ProviderConfig:
    """Provider configuration bound to a test shop."""

    return ProviderConfig(
        client_id="test_client_id",
        client_secret="test_client_secret",
        shop_domain="acme.myshopify.com",
        authorize_url="https://{shop}/admin/oauth/authorize",
        token_url="https://{shop}/admin/oauth/access_token",
        profile_url="https://{shop}/admin/shop.json",
        redirect_uri="http://localhost:8080/auth/shopify/callback",
        default_scopes=("read_products", "read_customers", "read_orders"),
    )


@pytest.fixture()
def provider(provider_config: ProviderConfig) -> ShopifyOAuth2Provider:
    return ShopifyOAuth2Provider(provider_config)


@pytest.fixture()
def strategy(provider: ShopifyOAuth2Provider) -> ShopifyStrategy:
    return ShopifyStrategy(provider)


@pytest.fixture(autouse=True)
def disable_rate_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the in-memory rate limiter out of the way between tests."""

    monkeypatch.setattr(limiter, "enabled", False)


@pytest.fixture()
def override_strategy(strategy: ShopifyStrategy) -> Generator[ShopifyStrategy, None, None]:
    """Serve the routes with the test strategy instead of the settings-built one."""

    main.app.dependency_overrides[get_strategy] = lambda: strategy
    yield strategy
    main.app.dependency_overrides.pop(get_strategy, None)


@pytest.fixture()
def client() -> Generator[SyncASGITestClient, None, None]:
    """Synchronous test client backed by httpx's ASGI transport."""

    with SyncASGITestClient(main.app) as test_client:
        yield test_client
