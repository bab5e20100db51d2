"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .. import __version__
from ..errors import URLMapError
from .api import api_router
from .api.errors import unhandled_error_handler, urlmap_error_handler
from .web import web_router
from .middleware.logging import LoggingMiddleware
from .middleware.request_id import RequestIdMiddleware


def create_app(
    storage_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.
    
    Args:
        storage_instance: Storage backend instance
        service_instance: MappingService instance
        config: Configuration instance
        
    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="url-map",
        description="Short-code allocation and visit accounting service",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    
    # Store instances in app state for access in routes
    app.state.storage = storage_instance
    app.state.service = service_instance
    app.state.config = config
    
    app.add_exception_handler(URLMapError, urlmap_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    # Added last so it runs first and the request ID is set for logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
    
    app.include_router(api_router, prefix="/api", tags=["API"])
    # Catch-all /{code} route, must be registered last
    app.include_router(web_router, tags=["Redirect"])
    
    return app
