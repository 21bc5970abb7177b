#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: one process serves many connections through async I/O
(FastAPI + asyncpg connection pool). Scale out by running more replicas behind a
proxy; set REDIS_URL so they share rate limit counters.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    DATABASE_USER / DATABASE_PASSWORD - Credentials overriding DATABASE_URL
    DATABASE_CONNECT_TIMEOUT_MS - Connect timeout (default 5000)
    REDIS_URL - Redis connection URL for shared rate limits (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on (default 4000)
    CORS_ORIGIN - Allowed CORS origin(s)
    FORWARDED_ALLOW_IPS - Proxies trusted to set X-Forwarded-For / -Proto
    RATE_LIMIT_WINDOW_SECONDS / RATE_LIMIT_MAX_REQUESTS - POST /shorten limit
    SHORT_CODE_LENGTH - Length of generated codes
    LOG_LEVEL - Logging level
    LOG_LEVELS - Per component levels (database, ratelimit, resolver, service, web)
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlink.database.postgres import URLStorePostgres
from shortlink.ratelimit import InMemoryRateLimiter, RedisRateLimiter
from shortlink.resolver import UniqueCodeResolver
from shortlink.service import ShortenService, RedirectService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import get_logger, setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store before serving traffic and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    store = URLStorePostgres(
        db_config=config.database_url,
        user=config.database_user,
        password=config.database_password,
        pool_max_size=config.database_pool_max_size,
        connect_timeout_ms=config.database_connect_timeout_ms,
        create_schema=config.database_create_schema,
        logger=get_logger("database"),
    )
    # Raises StorageError when the database is unreachable; startup then fails
    await store.connect()

    if config.redis_url:
        logger.info("Using Redis for rate limit counters")
        rate_limiter = RedisRateLimiter(
            config.redis_url,
            max_requests=config.rate_limit_max_requests,
            window_seconds=config.rate_limit_window_seconds,
            logger=get_logger("ratelimit"),
        )
        try:
            await rate_limiter.connect()
        except Exception:
            await store.close()
            raise
    else:
        rate_limiter = InMemoryRateLimiter(
            max_requests=config.rate_limit_max_requests,
            window_seconds=config.rate_limit_window_seconds,
            logger=get_logger("ratelimit"),
        )

    resolver = UniqueCodeResolver(
        store=store,
        generator=ShortCodeGenerator(default_length=config.short_code_length),
        max_attempts=config.max_attempts,
        logger=get_logger("resolver"),
    )

    app.state.store = store
    app.state.rate_limiter = rate_limiter
    app.state.shorten_service = ShortenService(
        store=store,
        resolver=resolver,
        conflict_retries=config.conflict_retries,
        logger=get_logger("service"),
    )
    app.state.redirect_service = RedirectService(store=store, logger=get_logger("service"))

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down URL shortener service...")
        await rate_limiter.close()
        await store.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
        component_levels=config.log_levels,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    # Services are created in lifespan, once the database is reachable
    app = create_app(
        store=None,
        shorten_service=None,
        redirect_service=None,
        rate_limiter=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        proxy_headers=True,
        forwarded_allow_ips=config.forwarded_allow_ips,
        log_level=config.log_level.lower(),
        access_log=True,
        lifespan="on",
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
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    # uvicorn reports a failed lifespan startup by returning without serving
    if not server.started:
        logger.error("Startup failed, exiting")
        sys.exit(1)


if __name__ == "__main__":
    main()
