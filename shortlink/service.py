"""Business logic services for URL shortener."""

import logging
from dataclasses import dataclass
from typing import Optional
from datetime import datetime, timezone

from .shortcode import ShortCodeGenerator
from .resolver import UniqueCodeResolver
from .database.base import URLStoreBase
from .database.models import URLMapping
from .errors import Conflict, GenerationExhausted, InvalidInput, NotFound
from .common.validators import is_valid_url


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of a shorten request."""

    mapping: URLMapping
    created: bool


class ShortenService:
    """Create short codes for original URLs, reusing existing mappings."""

    def __init__(
        self,
        store: URLStoreBase,
        resolver: Optional[UniqueCodeResolver] = None,
        conflict_retries: int = 2,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shorten service.

        Args:
            store: Store instance
            resolver: Optional unique code resolver (built over store if omitted)
            conflict_retries: Extra insert attempts after a short code conflict
            logger: Optional logger
        """
        self.store = store
        self.resolver = resolver or UniqueCodeResolver(store, ShortCodeGenerator())
        self.conflict_retries = conflict_retries
        self.logger = logger or logging.getLogger(__name__)

    async def shorten(self, original_url: Optional[str]) -> ShortenResult:
        """Shorten a URL, or return the mapping it already has.

        Args:
            original_url: The original long URL

        Returns:
            ShortenResult with created=False when the URL was already shortened

        Raises:
            InvalidInput: If the URL is missing or malformed
            GenerationExhausted: If no unique code could be stored
            StorageError: If the store fails
        """
        if not original_url or not isinstance(original_url, str):
            raise InvalidInput("Original URL is required")

        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidInput(f"Invalid URL: {error}")

        existing = await self.store.find_by_original_url(original_url)
        if existing:
            self.logger.debug(f"Reusing short code {existing.short_code} for {original_url}")
            return ShortenResult(mapping=existing, created=False)

        for attempt in range(self.conflict_retries + 1):
            mapping = URLMapping(
                short_code=await self.resolver.resolve(),
                original_url=original_url,
                created_at=datetime.now(timezone.utc),
            )
            try:
                await self.store.insert(mapping)
            except Conflict as e:
                if e.field == "original_url":
                    existing = await self.store.find_by_original_url(original_url)
                    if existing:
                        return ShortenResult(mapping=existing, created=False)
                    raise
                self.logger.warning(
                    f"Short code {mapping.short_code} taken between check and insert "
                    f"(attempt {attempt + 1}/{self.conflict_retries + 1})"
                )
                continue

            self.logger.info(f"Created short URL: {mapping.short_code} -> {original_url}")
            return ShortenResult(mapping=mapping, created=True)

        self.logger.error(f"Gave up storing a short code for {original_url} after repeated conflicts")
        raise GenerationExhausted()


class RedirectService:
    """Resolve short codes back to their original URLs."""

    def __init__(self, store: URLStoreBase, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, short_code: str) -> str:
        """Get the original URL for a short code.

        Raises:
            NotFound: If the code was never issued
            StorageError: If the store fails
        """
        if not ShortCodeGenerator.is_valid_format(short_code):
            raise NotFound()

        mapping = await self.store.find_by_code(short_code)
        if mapping is None:
            self.logger.info(f"Short code not found: {short_code}")
            raise NotFound()

        return mapping.original_url
