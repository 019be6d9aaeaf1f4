"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from shopify_auth.api.routes.oauth import limiter, router as oauth_router
from shopify_auth.core.config import settings
from shopify_auth.integrations.oauth.exceptions import ConfigError
from shopify_auth.integrations.oauth.factory import ShopifyProviderFactory


logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    if ShopifyProviderFactory.is_configured():
        logger.info("Startup: Shopify provider configured")
    else:
        logger.warning("Startup: SHOPIFY_API_KEY / SHOPIFY_SECRET not set; auth routes will fail")
    yield
    logger.info("Shutdown: complete")


async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
    logger.error("Shopify provider misconfigured: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


app = FastAPI(lifespan=lifespan)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(ConfigError, config_error_handler)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "configured": ShopifyProviderFactory.is_configured()}


app.include_router(oauth_router, prefix="/auth")
