"""Status and redirect routes."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from ..api.schemas import StatusResponse, ErrorResponse

router = APIRouter()


@router.get("/", response_model=StatusResponse, summary="Service status")
async def service_status(request: Request):
    """Status message, including whether the database answers."""
    store = request.app.state.store
    healthy = await store.health_check()

    return StatusResponse(
        message="URL shortener is running",
        status="ok" if healthy else "degraded",
        database="healthy" if healthy else "unhealthy",
    )


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"model": ErrorResponse, "description": "Short code not found"}},
    summary="Follow short URL",
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.redirect_service

    original_url = await service.resolve(short_code)

    # Temporary redirect
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
