"""Access logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request, tagged with its correlation ID."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("urlmap.web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        request_id = getattr(request.state, "request_id", "-")
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                f"[{request_id}] {request.method} {request.url.path} from {client_ip} failed"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"[{request_id}] {request.method} {request.url.path} from {client_ip} "
            f"-> {response.status_code} ({elapsed_ms:.1f}ms)",
        )
        return response
