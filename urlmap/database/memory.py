"""In-memory storage backend for url-map."""

import asyncio
import itertools
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..errors import ConflictError, MappingNotFoundError
from .base import MappingStorageBase
from .models import Mapping


class InMemoryMappingStorage(MappingStorageBase):
    """Volatile storage backed by a dict.
    
    Writes go through a single asyncio lock, so inserts cannot race each other
    and concurrent increments of one code never lose an update. Stored
    mappings are immutable; an increment swaps in a copy.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize empty storage.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self._mappings: Dict[str, Mapping] = {}
        self._ids = itertools.count(1)
        self._write_lock = asyncio.Lock()
    
    def __len__(self) -> int:
        return len(self._mappings)
    
    async def create(self, code: str, original_url: str) -> Mapping:
        async with self._write_lock:
            if code in self._mappings:
                raise ConflictError(f"Short code '{code}' already exists")
            
            mapping = Mapping(
                code=code,
                original_url=original_url,
                created_at=datetime.now(timezone.utc),
                visit_count=0,
                id=next(self._ids),
            )
            self._mappings[code] = mapping
        
        self.logger.debug(f"Stored mapping {code} -> {original_url}")
        return mapping
    
    async def fetch_by_code(self, code: str) -> Mapping:
        mapping = self._mappings.get(code)
        if mapping is None:
            raise MappingNotFoundError(f"No mapping for short code '{code}'")
        return mapping
    
    async def increment_and_fetch(self, code: str) -> Mapping:
        async with self._write_lock:
            mapping = self._mappings.get(code)
            if mapping is None:
                raise MappingNotFoundError(f"No mapping for short code '{code}'")
            
            mapping = await self._count_visit(mapping)
            self._mappings[code] = mapping
        
        return mapping
    
    async def _count_visit(self, mapping: Mapping) -> Mapping:
        """Next version of a mapping with one more visit; called under the write lock."""
        return replace(mapping, visit_count=mapping.visit_count + 1)
    
    async def list_recent(self, limit: int = 100) -> List[Mapping]:
        # Ties on created_at fall back to insertion order via id
        mappings = sorted(
            self._mappings.values(),
            key=lambda m: (m.created_at, m.id),
            reverse=True,
        )
        return mappings[:limit]
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        self.logger.debug("In-memory storage closed")
