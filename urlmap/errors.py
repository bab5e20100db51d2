"""Error taxonomy for url-map.

Every error carries a stable ``kind`` string and a human readable message so it
can be serialized without loss. The HTTP layer maps kinds to status codes; see
``urlmap.web_app.api.errors``.
"""

from typing import Any, Dict


class URLMapError(Exception):
    """Base class for all url-map errors."""

    kind = "internal_error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.kind

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"error": self.kind, "message": self.message}

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


# Client input errors. Raised before any storage access, never retried.

class ValidationError(URLMapError):
    """Client input rejected."""

    kind = "invalid_input"


class InvalidUrlError(ValidationError):
    """URL is empty, malformed or uses a scheme other than http/https."""

    kind = "invalid_url"


class UrlTooLongError(ValidationError):
    """URL exceeds the configured maximum length."""

    kind = "url_too_long"


class BlockedUrlError(ValidationError):
    """URL host is on the deny-list."""

    kind = "blocked_url"


class InvalidShortCodeError(ValidationError):
    """Short code is empty, too long or outside the code alphabet."""

    kind = "invalid_short_code"


class InvalidInputError(ValidationError):
    """Generic invalid request parameter."""

    kind = "invalid_input"


# Storage errors raised by MappingStorageBase implementations.

class StorageError(URLMapError):
    """Storage backend failure."""

    kind = "database_error"


class ConflictError(StorageError):
    """Short code already exists."""

    kind = "conflict"


class MappingNotFoundError(StorageError):
    """No mapping stored under the requested code."""

    kind = "not_found"


class StorageUnavailableError(StorageError):
    """Backend unreachable, timed out or out of pooled connections."""

    kind = "unavailable"


class DatabaseError(StorageError):
    """Any other backend failure."""

    kind = "database_error"


# Domain errors raised by the mapping service.

class ShortCodeNotFoundError(URLMapError):
    """Unknown short code."""

    kind = "not_found"

    def __init__(self, code: str):
        super().__init__(f"unknown short code '{code}'")
        self.code = code


class CodeGenerationExhaustedError(URLMapError):
    """Collision retry budget exhausted."""

    kind = "code_generation_exhausted"

    def __init__(self, attempts: int):
        super().__init__(
            f"could not allocate a unique short code after {attempts} attempts; "
            "widen the code length or alphabet"
        )
        self.attempts = attempts


class InternalError(URLMapError):
    """Unexpected internal failure."""

    kind = "internal_error"
