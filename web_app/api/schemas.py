"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Model whose JSON keys are camelCase (originalUrl, shortUrl, ...)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ShortenRequest(CamelModel):
    """Request to shorten a URL."""

    # Missing or empty values are rejected by ShortenService
    original_url: Optional[str] = Field(None, description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"originalUrl": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")
    short_code: str = Field(..., description="The short code")
    original_url: str = Field(..., description="The original long URL")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shortUrl": "http://localhost:4000/aZ3k9Q",
                    "shortCode": "aZ3k9Q",
                    "originalUrl": "https://example.com/very/long/path",
                    "createdAt": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class StatusResponse(BaseModel):
    """Service status response."""

    message: str = Field(..., description="Human readable status")
    status: str = Field(..., description="ok or degraded")
    database: str = Field(..., description="Database status")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
