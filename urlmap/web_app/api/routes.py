"""API routes implementation."""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Query, Request

from ...common.headers import build_base_url, build_short_url
from ...database.models import Mapping
from .schemas import (
    ErrorResponse,
    HealthResponse,
    MappingResponse,
    ShortenRequest,
)

router = APIRouter()


def _to_response(request: Request, mapping: Mapping) -> MappingResponse:
    """Serialize a mapping with the public short URL."""
    config = request.app.state.config
    
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    
    return MappingResponse(
        code=mapping.code,
        short_url=build_short_url(mapping.code, base_url, config.path_prefix),
        original_url=mapping.original_url,
        created_at=mapping.created_at,
        visit_count=mapping.visit_count,
    )


@router.post(
    "/shorten",
    response_model=MappingResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or too long URL"},
        403: {"model": ErrorResponse, "description": "Blocked host"},
        500: {"model": ErrorResponse, "description": "Storage failure or code space exhausted"},
    },
    summary="Create short URL",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    mapping = await service.shorten(body.original_url)
    return _to_response(request, mapping)


@router.get(
    "/stats/{code}",
    response_model=MappingResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed short code"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL statistics",
    description="Read-only; does not count as a visit.",
)
async def get_stats(request: Request, code: str):
    """Get statistics for a short code."""
    service = request.app.state.service
    mapping = await service.stats(code)
    return _to_response(request, mapping)


@router.get(
    "/urls",
    response_model=List[MappingResponse],
    summary="List recent URLs",
)
async def list_recent_urls(request: Request, limit: int = Query(100)):
    """List recently created short URLs, newest first."""
    service = request.app.state.service
    mappings = await service.recent(limit)
    return [_to_response(request, m) for m in mappings]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request):
    """Health check including the storage backend."""
    service = request.app.state.service
    
    health = await service.health_check()
    
    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
