"""Access logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlink.common.headers import get_client_ip
from shortlink.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status, client and duration.

    5xx responses log at ERROR, 4xx (including 429) at WARNING and the rest at
    INFO. Status checks on ``GET /`` log at DEBUG.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    @staticmethod
    def level_for(method: str, path: str, status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        if method == "GET" and path == "/":
            return logging.DEBUG
        return logging.INFO

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client_ip = get_client_ip(request.client.host if request.client else None)

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                f"{request.method} {request.url.path} from {client_ip} failed "
                f"after {(time.perf_counter() - started) * 1000:.1f}ms"
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        self.logger.log(
            self.level_for(request.method, request.url.path, response.status_code),
            f"{request.method} {request.url.path} {response.status_code} "
            f"from {client_ip} in {duration_ms:.1f}ms",
        )
        return response
