"""FastAPI web layer for url-map."""

from .app_factory import create_app

__all__ = ["create_app"]
