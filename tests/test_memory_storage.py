"""Tests for the in-memory storage backend."""

import asyncio
from datetime import timezone

import pytest
from urlmap.database.memory import InMemoryMappingStorage
from urlmap.errors import ConflictError, MappingNotFoundError

from conftest import YieldingStorage


class NoLock:
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def memory_storage():
    return InMemoryMappingStorage()


@pytest.mark.asyncio
class TestInMemoryMappingStorage:
    """Test the storage contract against the in-memory backend."""
    
    async def test_create(self, memory_storage):
        mapping = await memory_storage.create("abc123", "https://example.com")
        
        assert mapping.code == "abc123"
        assert mapping.original_url == "https://example.com"
        assert mapping.visit_count == 0
        assert mapping.created_at.tzinfo == timezone.utc
        assert mapping.id == 1
    
    async def test_create_duplicate_code_conflicts(self, memory_storage):
        await memory_storage.create("abc123", "https://example.com/first")
        
        with pytest.raises(ConflictError) as exc_info:
            await memory_storage.create("abc123", "https://example.com/second")
        
        assert exc_info.value.kind == "conflict"
        stored = await memory_storage.fetch_by_code("abc123")
        assert stored.original_url == "https://example.com/first"
        assert len(memory_storage) == 1
    
    async def test_concurrent_create_same_code(self, memory_storage):
        """Exactly one of many racing inserts of one code wins."""
        results = await asyncio.gather(
            *[memory_storage.create("race1", f"https://example.com/{i}") for i in range(20)],
            return_exceptions=True,
        )
        
        winners = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(winners) == 1
        assert len(conflicts) == 19
    
    async def test_fetch_missing(self, memory_storage):
        with pytest.raises(MappingNotFoundError):
            await memory_storage.fetch_by_code("missing")
    
    async def test_increment_and_fetch(self, memory_storage):
        await memory_storage.create("abc123", "https://example.com")
        
        first = await memory_storage.increment_and_fetch("abc123")
        second = await memory_storage.increment_and_fetch("abc123")
        
        assert first.visit_count == 1
        assert second.visit_count == 2
        assert second.created_at == first.created_at
        assert second.original_url == "https://example.com"
    
    async def test_increment_missing(self, memory_storage):
        with pytest.raises(MappingNotFoundError):
            await memory_storage.increment_and_fetch("missing")
    
    async def test_fetch_stats_does_not_mutate(self, memory_storage):
        await memory_storage.create("abc123", "https://example.com")
        await memory_storage.increment_and_fetch("abc123")
        
        for _ in range(5):
            stats = await memory_storage.fetch_stats("abc123")
            assert stats.visit_count == 1
    
    async def test_fetch_stats_missing(self, memory_storage):
        with pytest.raises(MappingNotFoundError):
            await memory_storage.fetch_stats("missing")
    
    async def test_concurrent_increments(self, memory_storage):
        await memory_storage.create("hot1", "https://example.com/hot")
        
        results = await asyncio.gather(
            *[memory_storage.increment_and_fetch("hot1") for _ in range(200)]
        )
        
        assert sorted(m.visit_count for m in results) == list(range(1, 201))
        assert (await memory_storage.fetch_stats("hot1")).visit_count == 200
    
    async def test_list_recent(self, memory_storage):
        for i in range(5):
            await memory_storage.create(f"code{i}", f"https://example.com/{i}")
        
        recent = await memory_storage.list_recent(limit=3)
        
        assert [m.code for m in recent] == ["code4", "code3", "code2"]
    
    async def test_health_check(self, memory_storage):
        assert await memory_storage.health_check()


@pytest.mark.asyncio
class TestInMemoryWriteLock:
    """The write lock keeps read-modify-write visits from interleaving."""
    
    async def test_yielding_increments_are_gap_free(self):
        storage = YieldingStorage()
        await storage.create("hot1", "https://example.com/hot")
        
        results = await asyncio.gather(
            *[storage.increment_and_fetch("hot1") for _ in range(100)]
        )
        
        assert sorted(m.visit_count for m in results) == list(range(1, 101))
        assert (await storage.fetch_stats("hot1")).visit_count == 100
    
    async def test_without_lock_visits_are_lost(self):
        storage = YieldingStorage()
        storage._write_lock = NoLock()
        await storage.create("hot1", "https://example.com/hot")
        
        await asyncio.gather(*[storage.increment_and_fetch("hot1") for _ in range(100)])
        
        assert (await storage.fetch_stats("hot1")).visit_count < 100
