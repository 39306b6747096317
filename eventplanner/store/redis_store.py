import logging

import redis.asyncio as redis
from pydantic import ValidationError

from eventplanner.errors import StorageError
from eventplanner.models.events import Event
from eventplanner.store.base import DocumentStore, decode_events, encode_events

_logger = logging.getLogger("eventplanner.store")


class RedisStore(DocumentStore):
    """Event document kept as one JSON string under a single Redis key."""

    name = "redis"

    def __init__(self, client: redis.Redis, key: str) -> None:
        self.client = client
        self.key = key

    async def load(self) -> list[Event]:
        try:
            raw = await self.client.get(self.key)
            if raw is None:
                return []
            return decode_events(raw)
        except (redis.RedisError, ValidationError) as e:
            _logger.exception("Failed to load event document from key %s", self.key)
            raise StorageError(detail="Failed to load events") from e

    async def write(self, events: list[Event]) -> None:
        try:
            await self.client.set(self.key, encode_events(events))
        except redis.RedisError as e:
            _logger.exception("Failed to write event document to key %s", self.key)
            raise StorageError(detail="Failed to save events") from e

    async def close(self) -> None:
        aclose = getattr(self.client, "aclose", None)
        if callable(aclose):
            await aclose()
        else:
            close = getattr(self.client, "close", None)
            if callable(close):
                await close()
