"""Storage factory: pick a backend from configuration.

The PostgreSQL backend is imported only when selected, so the in-memory
backend works without asyncpg being reachable.
"""

import logging
from typing import Optional

from .base import MappingStorageBase
from .memory import InMemoryMappingStorage


BACKENDS = ("memory", "postgres")


def create_storage(
    backend: str = "memory",
    database_url: Optional[str] = None,
    pool_max_size: int = 5,
    connection_timeout_seconds: float = 30,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> MappingStorageBase:
    """Return a storage backend instance.
    
    Args:
        backend: "memory" or "postgres"
        database_url: DSN, required for postgres
        pool_max_size: Maximum pooled connections (postgres)
        connection_timeout_seconds: Acquire/query timeout (postgres)
        create_tables: Create the schema on first connection (postgres)
        logger: Optional logger
        
    Raises:
        ValueError: Unknown backend or missing database_url
    """
    name = (backend or "memory").strip().lower()
    
    if name == "memory":
        return InMemoryMappingStorage(logger=logger)
    
    if name == "postgres":
        if not database_url:
            raise ValueError("database_url is required for the postgres backend")
        from .postgres import PostgresMappingStorage
        return PostgresMappingStorage(
            database_url=database_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            create_tables=create_tables,
            logger=logger,
        )
    
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {BACKENDS})")


def create_storage_from_config(config, logger: Optional[logging.Logger] = None) -> MappingStorageBase:
    """Build the storage backend described by a Config."""
    return create_storage(
        backend=config.storage_backend,
        database_url=config.database_url,
        pool_max_size=config.pool_max_size,
        connection_timeout_seconds=config.connection_timeout_seconds,
        create_tables=config.create_tables,
        logger=logger,
    )
