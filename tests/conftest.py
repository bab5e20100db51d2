"""Pytest configuration and fixtures."""

import asyncio
from typing import Iterable, List

import pytest
from httpx import ASGITransport, AsyncClient

from urlmap.common.logging_config import setup_logging
from urlmap.common.validators import UrlValidator
from urlmap.config import Config
from urlmap.database.memory import InMemoryMappingStorage
from urlmap.service import MappingService
from urlmap.shortcode import ShortCodeGenerator
from urlmap.web_app import create_app


class ScriptedGenerator(ShortCodeGenerator):
    """Generator that returns a fixed sequence of codes."""
    
    def __init__(self, codes: Iterable[str]):
        super().__init__()
        self.codes = list(codes)
        self.issued: List[str] = []
    
    def generate(self, length=None) -> str:
        code = self.codes.pop(0)
        self.issued.append(code)
        return code


class RecordingStorage(InMemoryMappingStorage):
    """In-memory storage that records which operations were called."""
    
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: List[tuple] = []
    
    async def create(self, code, original_url):
        self.calls.append(("create", code))
        return await super().create(code, original_url)
    
    async def fetch_by_code(self, code):
        self.calls.append(("fetch_by_code", code))
        return await super().fetch_by_code(code)
    
    async def increment_and_fetch(self, code):
        self.calls.append(("increment_and_fetch", code))
        return await super().increment_and_fetch(code)
    
    async def fetch_stats(self, code):
        self.calls.append(("fetch_stats", code))
        return await super().fetch_stats(code)


class YieldingStorage(InMemoryMappingStorage):
    """Suspends between reading a mapping and writing its new count."""
    
    async def _count_visit(self, mapping):
        await asyncio.sleep(0)
        return await super()._count_visit(mapping)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def storage(logger) -> RecordingStorage:
    """Create in-memory storage that records calls."""
    return RecordingStorage(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def validator(logger):
    """Create URL validator with a small deny-list."""
    return UrlValidator(
        max_length=2048,
        blocked_hosts=["blocked.example", "Evil.Example.org"],
        logger=logger,
    )


@pytest.fixture
def service(storage, validator, short_code_generator, logger) -> MappingService:
    """Create service instance."""
    return MappingService(
        storage=storage,
        validator=validator,
        generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(
        storage_backend="memory",
        base_url="http://testserver",
        blocked_hosts="blocked.example",
    )


@pytest.fixture
def app(storage, service, config):
    """Create test FastAPI app."""
    return create_app(
        storage_instance=storage,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
