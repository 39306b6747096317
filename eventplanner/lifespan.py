"""Startup and shutdown of the shared document store."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import redis.asyncio as redis
from fastapi import FastAPI
from redis.asyncio import BlockingConnectionPool as RedisConnectionPool

from eventplanner import state
from eventplanner.config import get_settings
from eventplanner.store.base import DocumentStore
from eventplanner.store.json_file import JsonFileStore
from eventplanner.store.memory import MemoryStore
from eventplanner.store.redis_store import RedisStore

logger = logging.getLogger(__name__)


@dataclass
class LifespanResources:
    """Container for resources initialized during lifespan."""

    store: DocumentStore | None = None


def init_redis() -> redis.Redis:
    """Initialize Redis connection with connection pool.

    Returns:
        Configured Redis client.
    """
    settings = get_settings()

    redis_pool = RedisConnectionPool(
        host=settings.redis.host,
        port=settings.redis.port,
        password=settings.redis.password if settings.redis.password else None,
        max_connections=settings.redis.max_connections,
        timeout=settings.redis.pool_timeout_sec,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_connect_timeout,
    )
    return redis.Redis(connection_pool=redis_pool, decode_responses=True)


def init_store() -> DocumentStore:
    """Build the document store selected by ``STORE_BACKEND``."""
    settings = get_settings().store
    if settings.backend == "memory":
        return MemoryStore()
    if settings.backend == "redis":
        return RedisStore(init_redis(), settings.redis_key)
    return JsonFileStore(settings.path)


async def setup_resources() -> LifespanResources:
    resources = LifespanResources(store=init_store())
    state.store = resources.store
    logger.info("Document store ready backend=%s", resources.store.name)
    return resources


async def cleanup_resources(resources: LifespanResources) -> None:
    if resources.store is not None:
        try:
            await resources.store.close()
        except Exception as e:
            logger.warning("Failed to close document store: %s", e)
    state.store = None


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    resources = await setup_resources()
    try:
        yield
    finally:
        await cleanup_resources(resources)
