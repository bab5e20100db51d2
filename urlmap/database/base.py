"""Abstract base class for url-map storage backends."""

from abc import ABC, abstractmethod
from typing import List

from .models import Mapping


class MappingStorageBase(ABC):
    """Storage contract shared by every backend.
    
    Implementations must enforce code uniqueness themselves (a unique index,
    an insert under a lock) and must increment visit counts in one indivisible
    step. The mapping service relies on both and holds no locks of its own.
    """
    
    @abstractmethod
    async def create(self, code: str, original_url: str) -> Mapping:
        """Insert a new mapping with a zero visit count.
        
        Args:
            code: The short code to use
            original_url: The original long URL
            
        Returns:
            The stored mapping
            
        Raises:
            ConflictError: If the code already exists
            StorageUnavailableError: On connectivity failure or timeout
        """
    
    @abstractmethod
    async def fetch_by_code(self, code: str) -> Mapping:
        """Get the mapping stored under a code.
        
        Raises:
            MappingNotFoundError: If no mapping matches
        """
    
    @abstractmethod
    async def increment_and_fetch(self, code: str) -> Mapping:
        """Atomically add one visit and return the updated mapping.
        
        Raises:
            MappingNotFoundError: If no mapping matches
        """
    
    async def fetch_stats(self, code: str) -> Mapping:
        """Get the mapping for statistics without mutating it.
        
        Raises:
            MappingNotFoundError: If no mapping matches
        """
        return await self.fetch_by_code(code)
    
    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[Mapping]:
        """List mappings, newest first.
        
        Args:
            limit: Maximum number of mappings to return
        """
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable.
        
        Returns:
            True if healthy, False otherwise
        """
    
    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
