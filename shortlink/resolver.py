"""Unique short code resolution."""

import logging
from typing import Optional

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .errors import GenerationExhausted


class UniqueCodeResolver:
    """Find a short code that is not yet stored.

    The existence check is not a reservation: another request may insert the
    same code before ours. The store's unique index has the final say and the
    caller must handle :class:`shortlink.errors.Conflict` on insert.
    """

    def __init__(
        self,
        store: URLStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 5,
        logger: Optional[logging.Logger] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, length: Optional[int] = None) -> str:
        """Generate candidates until one is unused.

        Args:
            length: Code length (uses the generator default if not specified)

        Returns:
            A short code that was unused at the time of the check

        Raises:
            GenerationExhausted: If every attempt collided
            StorageError: If the store lookup fails
        """
        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate(length)
            if not await self.store.code_exists(code):
                if attempt > 1:
                    self.logger.debug(f"Generated code after {attempt} attempts: {code}")
                return code
            self.logger.debug(f"Short code collision on attempt {attempt}: {code}")

        self.logger.error(
            f"Short code space exhausted: {self.max_attempts} collisions in a row "
            f"at length {length or self.generator.default_length}"
        )
        raise GenerationExhausted()
