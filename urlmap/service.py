"""Business logic service for url-map."""

import logging
from typing import Dict, List, Optional

from .common.validators import UrlValidator, is_valid_short_code
from .database.base import MappingStorageBase
from .database.models import Mapping
from .errors import (
    CodeGenerationExhaustedError,
    ConflictError,
    InvalidInputError,
    InvalidShortCodeError,
    MappingNotFoundError,
    ShortCodeNotFoundError,
    ValidationError,
)
from .shortcode import MAX_CODE_LENGTH, ShortCodeGenerator


MAX_RECENT_LIMIT = 1000


class MappingService:
    """Allocate short codes and resolve them back to URLs.

    The service is stateless between calls. Code uniqueness and atomic visit
    counting are the storage backend's job; the service only retries when the
    backend reports a conflict.
    """

    def __init__(
        self,
        storage: MappingStorageBase,
        validator: Optional[UrlValidator] = None,
        generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = 5,
        code_length: Optional[int] = None,
    ):
        """Initialize mapping service.

        Args:
            storage: Storage backend
            validator: Optional URL validator (no deny-list if omitted)
            generator: Optional short code generator
            logger: Optional logger
            max_attempts: Code allocation attempts before giving up
            code_length: Length of generated codes (generator default if omitted)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.storage = storage
        self.validator = validator or UrlValidator()
        self.generator = generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_attempts = max_attempts
        self.code_length = code_length

    async def shorten(self, original_url: str) -> Mapping:
        """Create a new mapping for a URL.

        Args:
            original_url: The original long URL

        Returns:
            The stored mapping (visit_count 0)

        Raises:
            ValidationError: If the URL is rejected (storage untouched)
            CodeGenerationExhaustedError: If every candidate code collided
            StorageError: Any non-conflict backend failure, not retried
        """
        try:
            self.validator.validate(original_url)
        except ValidationError as e:
            self.logger.warning(f"Rejected URL: {e}")
            raise

        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate(self.code_length)
            try:
                mapping = await self.storage.create(code, original_url)
            except ConflictError:
                self.logger.debug(
                    f"Short code collision on attempt {attempt}/{self.max_attempts}: {code}"
                )
                continue

            self.logger.info(f"Created short URL: {mapping.code} -> {original_url}")
            return mapping

        self.logger.error(f"Short code allocation exhausted after {self.max_attempts} attempts")
        raise CodeGenerationExhaustedError(self.max_attempts)

    async def resolve(self, code: str) -> Mapping:
        """Resolve a short code and count the visit.

        Args:
            code: The short code to lookup

        Returns:
            The mapping with its post-increment visit count

        Raises:
            InvalidShortCodeError: Malformed code (storage untouched)
            ShortCodeNotFoundError: Unknown code
        """
        self._check_code(code)

        try:
            mapping = await self.storage.increment_and_fetch(code)
        except MappingNotFoundError as e:
            self.logger.warning(f"Short code not found: {code}")
            raise ShortCodeNotFoundError(code) from e

        self.logger.debug(f"Resolved {code} -> {mapping.original_url} (visits={mapping.visit_count})")
        return mapping

    async def stats(self, code: str) -> Mapping:
        """Get a mapping without counting a visit.

        Raises:
            InvalidShortCodeError: Malformed code (storage untouched)
            ShortCodeNotFoundError: Unknown code
        """
        self._check_code(code)

        try:
            return await self.storage.fetch_stats(code)
        except MappingNotFoundError as e:
            self.logger.warning(f"Short code not found: {code}")
            raise ShortCodeNotFoundError(code) from e

    async def recent(self, limit: int = 100) -> List[Mapping]:
        """List recently created mappings, newest first.

        Args:
            limit: Maximum number to return (1..1000)
        """
        if not 1 <= limit <= MAX_RECENT_LIMIT:
            raise InvalidInputError(f"limit must be between 1 and {MAX_RECENT_LIMIT}")
        return await self.storage.list_recent(limit)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.storage.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.storage.close()

    def _check_code(self, code: str) -> None:
        # Any length up to the schema bound stays resolvable after the
        # configured generation length changes
        is_valid, error = is_valid_short_code(code, max_length=MAX_CODE_LENGTH)
        if not is_valid:
            self.logger.warning(f"Rejected short code {code!r}: {error}")
            raise InvalidShortCodeError(error)
