"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .postgres import URLStorePostgres
from .models import URLMapping

__all__ = ["URLStoreBase", "URLStorePostgres", "URLMapping"]
