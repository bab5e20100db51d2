"""Header parsing utilities for url-map."""

import secrets
import string
from typing import Dict, Optional


REQUEST_ID_HEADER = "x-request-id"
REQUEST_ID_CHARS = string.ascii_uppercase + string.digits
REQUEST_ID_LENGTH = 16


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.
    
    Args:
        headers: Request headers dictionary
        
    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    
    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.
    
    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config
    
    Returns:
        Base URL (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)
    
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"
    
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    
    return fallback_base_url.rstrip("/")


def generate_request_id() -> str:
    """Generate a correlation ID for request tracing."""
    return ''.join(secrets.choice(REQUEST_ID_CHARS) for _ in range(REQUEST_ID_LENGTH))


def get_request_id(headers: Dict[str, str]) -> str:
    """Return the caller-supplied X-Request-ID or a fresh one."""
    for k, v in headers.items():
        if k.lower() == REQUEST_ID_HEADER and v and v.strip():
            return v.strip()
    return generate_request_id()


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and short code into the public link."""
    parts = [base_url.rstrip("/")]
    if path_prefix.strip("/"):
        parts.append(path_prefix.strip("/"))
    parts.append(short_code)
    return "/".join(parts)
