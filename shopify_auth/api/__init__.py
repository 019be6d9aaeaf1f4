"""Public API package exports."""

from shopify_auth.api.routes.oauth import router as oauth_router

__all__ = ["oauth_router"]
