"""Data models for url-map."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping as MappingType, Optional


@dataclass(frozen=True)
class Mapping:
    """A short code and the URL it points to."""
    
    code: str
    original_url: str
    created_at: datetime
    visit_count: int = 0
    id: Optional[int] = None
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "original_url": self.original_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "visit_count": self.visit_count,
        }
    
    @classmethod
    def from_record(cls, record: MappingType[str, Any]) -> "Mapping":
        """Create from a database row (asyncpg Record or dict)."""
        return cls(
            code=record["code"],
            original_url=record["original_url"],
            created_at=record["created_at"],
            visit_count=record["visit_count"],
            id=record["id"],
        )
