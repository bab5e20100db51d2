"""Validation utilities for url-map."""

import logging
from typing import Iterable, Optional, Tuple
from urllib.parse import urlparse

from ..errors import BlockedUrlError, InvalidUrlError, UrlTooLongError
from ..shortcode import MAX_CODE_LENGTH, ShortCodeGenerator


ALLOWED_SCHEMES = ("http", "https")
DEFAULT_MAX_URL_LENGTH = 2048


class UrlValidator:
    """Check candidate URLs before they are shortened.
    
    The deny-list is fixed at construction time. Host matching is exact
    (case-insensitive, as hostnames are); subdomains of a blocked host are
    not blocked.
    """
    
    def __init__(
        self,
        max_length: int = DEFAULT_MAX_URL_LENGTH,
        blocked_hosts: Iterable[str] = (),
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize validator.
        
        Args:
            max_length: Maximum accepted URL length in characters
            blocked_hosts: Hosts that may not be shortened
            logger: Optional logger
        """
        self.max_length = max_length
        normalized = (host.strip().lower().rstrip(".") for host in blocked_hosts if host)
        self.blocked_hosts = frozenset(host for host in normalized if host)
        self.logger = logger or logging.getLogger(__name__)
    
    def validate(self, url: str) -> None:
        """Validate a URL.
        
        Args:
            url: The URL to validate
            
        Raises:
            InvalidUrlError: Empty, malformed or non-http(s) URL
            UrlTooLongError: URL longer than max_length
            BlockedUrlError: URL host is on the deny-list
        """
        if not url or not isinstance(url, str):
            raise InvalidUrlError("URL is required")
        
        if len(url) > self.max_length:
            raise UrlTooLongError(f"URL exceeds {self.max_length} characters")
        
        if any(c.isspace() or ord(c) < 32 or ord(c) == 127 for c in url):
            raise InvalidUrlError("URL must not contain whitespace or control characters")
        
        try:
            result = urlparse(url)
            host = result.hostname
            # Accessing port validates it (raises ValueError when out of range)
            result.port
        except ValueError as e:
            raise InvalidUrlError(f"Invalid URL format: {e}") from e
        
        if not result.scheme:
            raise InvalidUrlError("URL must be absolute")
        
        if result.scheme.lower() not in ALLOWED_SCHEMES:
            raise InvalidUrlError("URL must use http or https protocol")
        
        if not host:
            raise InvalidUrlError("URL must have a valid domain")
        
        # "blocked.example." is the fully-qualified form of the same host
        if host.rstrip(".") in self.blocked_hosts:
            self.logger.warning(f"Rejected blocked host: {host}")
            raise BlockedUrlError(f"Host '{host}' is not allowed")


def is_valid_short_code(short_code: str, max_length: int = MAX_CODE_LENGTH) -> Tuple[bool, str]:
    """Validate short code syntax.
    
    Args:
        short_code: The short code to validate
        max_length: Maximum length for short code
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"
    
    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"
    
    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, "Short code can only contain letters and numbers"
    
    return True, ""
