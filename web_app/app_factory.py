"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .middleware import LoggingMiddleware, RateLimitMiddleware, register_error_handlers


def create_app(
    store,
    shorten_service,
    redirect_service,
    rate_limiter,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Instances may be None when a lifespan fills app.state at startup.

    Args:
        store: Store instance
        shorten_service: ShortenService instance
        redirect_service: RedirectService instance
        rate_limiter: Optional RateLimiter for POST /shorten
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Shorten URLs and redirect short codes to their original URL",
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
    )

    # Store instances in app state for access in routes
    app.state.store = store
    app.state.shorten_service = shorten_service
    app.state.redirect_service = redirect_service
    app.state.rate_limiter = rate_limiter
    app.state.config = config

    # Last added runs first: CORS wraps every response, 429s included
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(LoggingMiddleware)

    origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"],
    )

    register_error_handlers(app)

    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
