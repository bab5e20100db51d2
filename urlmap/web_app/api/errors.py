"""Mapping of url-map error kinds to HTTP responses.

This table is part of the public contract; changing a status code is a
breaking change for clients.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ...errors import InternalError, URLMapError


ERROR_STATUS_CODES = {
    "invalid_url": status.HTTP_400_BAD_REQUEST,
    "url_too_long": status.HTTP_400_BAD_REQUEST,
    "invalid_short_code": status.HTTP_400_BAD_REQUEST,
    "invalid_input": status.HTTP_400_BAD_REQUEST,
    "blocked_url": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "code_generation_exhausted": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "unavailable": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "database_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

logger = logging.getLogger("urlmap.web")


def status_code_for(error: URLMapError) -> int:
    """HTTP status for an error; unknown kinds are server errors."""
    return ERROR_STATUS_CODES.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def urlmap_error_handler(request: Request, exc: URLMapError) -> JSONResponse:
    """Serialize a URLMapError as {"error", "message", "status"}."""
    status_code = status_code_for(exc)
    
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    
    return JSONResponse(
        status_code=status_code,
        content={**exc.to_dict(), "status": status_code},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer any non-URLMapError failure as internal_error, keeping the body shape."""
    logger.error(f"{request.method} {request.url.path} crashed: {exc!r}", exc_info=exc)
    error = InternalError()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={**error.to_dict(), "status": status.HTTP_500_INTERNAL_SERVER_ERROR},
    )
