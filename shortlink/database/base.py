"""Abstract base class for URL mapping store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import URLMapping


class URLStoreBase(ABC):
    """Abstract base class for URL mapping store operations.

    Implementations must enforce uniqueness of ``short_code`` (and of
    ``original_url``) in the store itself and report violations by raising
    :class:`shortlink.errors.Conflict`. Any other failure is raised as
    :class:`shortlink.errors.StorageError`.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection pool.

        Raises:
            StorageError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def insert(self, mapping: URLMapping) -> None:
        """Persist a new mapping.

        Args:
            mapping: The mapping to store

        Raises:
            Conflict: If the short code or original URL is already stored
            StorageError: On any other store failure
        """
        pass

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[URLMapping]:
        """Get the mapping for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[URLMapping]:
        """Get the mapping for an exact original URL.

        Args:
            original_url: The original URL to lookup

        Returns:
            The mapping if found, None otherwise
        """
        pass

    async def code_exists(self, short_code: str) -> bool:
        """Check if a short code is already stored."""
        return await self.find_by_code(short_code) is not None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
