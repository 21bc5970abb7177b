"""Middleware for URL shortener web app."""

from .logging import LoggingMiddleware
from .rate_limit import RateLimitMiddleware
from .error_handling import register_error_handlers

__all__ = ["LoggingMiddleware", "RateLimitMiddleware", "register_error_handlers"]
