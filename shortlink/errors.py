"""
Error classes for the URL shortener.

Each error carries the HTTP status the web layer answers with and a default
message that is safe to show to clients.
"""

from typing import Optional


class ShortLinkError(Exception):
    """
    Base error class.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Client-facing error message
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidInput(ShortLinkError):
    """400 Missing or malformed input."""
    status_code = 400
    message = "Invalid input"


class NotFound(ShortLinkError):
    """404 Short code not found."""
    status_code = 404
    message = "URL not found"


class Conflict(ShortLinkError):
    """
    A unique index was violated on insert.

    Retried inside the shorten service and never returned to clients as is.

    Attributes:
        field: Column whose unique index was violated ("short_code" or "original_url")
    """
    status_code = 409
    message = "Short code already exists"

    def __init__(self, message: Optional[str] = None, field: str = "short_code"):
        super().__init__(message)
        self.field = field


class GenerationExhausted(ShortLinkError):
    """500 No unused short code found within the attempt budget."""
    status_code = 500
    message = "Unable to generate a unique short code"


class StorageError(ShortLinkError):
    """500 Store connectivity or persistence failure."""
    status_code = 500
    message = "Storage error"
