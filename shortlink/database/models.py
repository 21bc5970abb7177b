"""Data models for URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


@dataclass(frozen=True)
class URLMapping:
    """Represents a persisted short code -> original URL mapping."""

    short_code: str
    original_url: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "URLMapping":
        """Create from a database row or dictionary."""
        created_at = record["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            short_code=record["short_code"],
            original_url=record["original_url"],
            created_at=created_at,
        )
