"""API routes implementation."""

from fastapi import APIRouter, Request, Response, status

from .schemas import ShortenRequest, ShortenResponse, ErrorResponse
from shortlink.common.links import build_base_url, build_short_url

router = APIRouter()


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": ShortenResponse, "description": "URL was already shortened"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL. Returns 201 for a new mapping, 200 if the URL was already shortened.",
)
async def shorten_url(request: Request, response: Response, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.shorten_service
    config = request.app.state.config

    result = await service.shorten(body.original_url)
    if not result.created:
        response.status_code = status.HTTP_200_OK

    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    mapping = result.mapping
    return ShortenResponse(
        short_url=build_short_url(
            short_code=mapping.short_code,
            base_url=base_url,
            path_prefix=config.path_prefix,
        ),
        short_code=mapping.short_code,
        original_url=mapping.original_url,
        created_at=mapping.created_at,
    )
