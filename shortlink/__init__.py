"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .resolver import UniqueCodeResolver
from .service import ShortenService, RedirectService, ShortenResult

__all__ = [
    "ShortCodeGenerator",
    "UniqueCodeResolver",
    "ShortenService",
    "RedirectService",
    "ShortenResult",
]
