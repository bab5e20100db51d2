#!/usr/bin/env python3
"""
Main entry point for the url-map service.

Concurrency: requests are served with async I/O (FastAPI + asyncpg pool).
Set WORKERS > 1 for multi-process scaling: uvicorn then imports
create_server_app in each worker process, and each worker has its own pool.

Usage:
    python -m urlmap.app

Environment variables:
    STORAGE_BACKEND - memory or postgres
    DATABASE_URL - PostgreSQL connection URL
    POOL_MAX_SIZE - Maximum database connections
    CONNECTION_TIMEOUT_SECONDS - Pool acquire / query timeout
    CREATE_TABLES - Create the schema on first connection
    BASE_URL - Base URL for short links
    HOST, PORT, WORKERS - Server binding
    BLOCKED_HOSTS - Comma-separated deny-list
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .common.logging_config import setup_logging
from .common.validators import UrlValidator
from .config import Config, load_config
from .database.factory import create_storage_from_config
from .service import MappingService
from .shortcode import ShortCodeGenerator
from .web_app import create_app


def build_service(config: Config, logger=None) -> MappingService:
    """Wire storage, validator and generator from configuration."""
    storage = create_storage_from_config(config, logger=logger)
    validator = UrlValidator(
        max_length=config.max_url_length,
        blocked_hosts=config.blocked_host_list,
        logger=logger,
    )
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    return MappingService(
        storage=storage,
        validator=validator,
        generator=generator,
        logger=logger,
        max_attempts=config.max_collision_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger
    
    logger.info("Starting url-map service...")
    logger.info(f"Storage backend: {config.storage_backend}")
    
    service = build_service(config, logger=logger)
    app.state.storage = service.storage
    app.state.service = service
    
    logger.info("Service started successfully")
    
    yield
    
    logger.info("Shutting down url-map service...")
    await service.close()
    logger.info("Service stopped")


def create_server_app(config: Optional[Config] = None, logger=None) -> FastAPI:
    """Build the served app; storage and service are created in lifespan.

    Also used as the uvicorn factory for multi-worker runs, where each worker
    process loads its own configuration.
    """
    if config is None:
        config = load_config()
    if logger is None:
        logger = setup_logging(
            level=config.log_level,
            log_file=config.log_file,
            json_format=config.log_json,
        )
    
    app = create_app(
        storage_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()
    
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    
    logger.info("url-map service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")
    
    if config.workers > 1:
        # Worker processes need an import string; uvicorn handles signals here
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "urlmap.app:create_server_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return
    
    uvicorn_config = uvicorn.Config(
        create_server_app(config, logger),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    
    server = uvicorn.Server(uvicorn_config)
    
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True
    
    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)
    
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except OSError as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
