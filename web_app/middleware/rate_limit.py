"""Rate limiting middleware."""

import logging
from typing import Callable, Iterable, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from shortlink.common.headers import get_client_ip
from shortlink.common.logging_config import get_logger


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply app.state.rate_limiter to selected (method, path) pairs."""

    def __init__(
        self,
        app,
        limited_routes: Iterable[Tuple[str, str]] = (("POST", "/shorten"),),
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(app)
        self.limited_routes = set(limited_routes)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        limiter = getattr(request.app.state, "rate_limiter", None)
        if limiter is None or (request.method, request.url.path) not in self.limited_routes:
            return await call_next(request)

        client_ip = get_client_ip(request.client.host if request.client else None)
        result = await limiter.hit(client_ip)

        headers = {
            "RateLimit-Limit": str(result.limit),
            "RateLimit-Remaining": str(result.remaining),
            "RateLimit-Reset": str(result.reset_after),
        }

        if not result.allowed:
            self.logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            headers["Retry-After"] = str(result.reset_after)
            return JSONResponse(
                {"error": "Too many requests, please try again later."},
                status_code=429,
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
