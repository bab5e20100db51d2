"""Common utilities for url-map."""

from .validators import UrlValidator, is_valid_short_code
from .headers import (
    build_base_url,
    build_short_url,
    extract_forwarded_headers,
    get_request_id,
)
from .logging_config import setup_logging

__all__ = [
    "UrlValidator",
    "is_valid_short_code",
    "extract_forwarded_headers",
    "build_base_url",
    "get_request_id",
    "build_short_url",
    "setup_logging",
]
