"""Redirect and liveness routes."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from ... import __version__

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def liveness():
    """Liveness probe; does not touch storage."""
    return {"status": "ok", "version": __version__}


@router.get(
    "/{code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to the original URL",
    description="Counts one visit.",
)
async def redirect(request: Request, code: str):
    """Resolve a short code and redirect to its original URL."""
    service = request.app.state.service
    mapping = await service.resolve(code)
    return RedirectResponse(url=mapping.original_url, status_code=status.HTTP_302_FOUND)
