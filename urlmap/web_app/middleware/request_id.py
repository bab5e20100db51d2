"""Correlation ID middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from ...common.headers import get_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to each request and echo it in the response."""
    
    async def dispatch(self, request: Request, call_next: Callable):
        """Read X-Request-ID or generate one."""
        request_id = get_request_id(dict(request.headers))
        request.state.request_id = request_id
        
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
