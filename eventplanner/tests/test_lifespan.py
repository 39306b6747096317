"""Tests for lifespan management."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from eventplanner import state
from eventplanner.config import clear_settings_cache


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestInitStore:

    def test_defaults_to_json_file(self, tmp_path):
        from eventplanner.lifespan import init_store
        from eventplanner.store.json_file import JsonFileStore

        with patch.dict(os.environ, {"STORE_PATH": str(tmp_path / "db.json")}, clear=True):
            store = init_store()
        assert isinstance(store, JsonFileStore)
        assert store.path == tmp_path / "db.json"

    def test_memory_backend(self):
        from eventplanner.lifespan import init_store
        from eventplanner.store.memory import MemoryStore

        with patch.dict(os.environ, {"STORE_BACKEND": "memory"}, clear=True):
            assert isinstance(init_store(), MemoryStore)

    def test_redis_backend(self):
        from eventplanner.lifespan import init_store
        from eventplanner.store.redis_store import RedisStore

        mock_client = MagicMock()
        with patch.dict(os.environ, {"STORE_BACKEND": "redis", "STORE_REDIS_KEY": "k"}, clear=True):
            with patch("eventplanner.lifespan.init_redis", return_value=mock_client):
                store = init_store()
        assert isinstance(store, RedisStore)
        assert store.client is mock_client
        assert store.key == "k"


class TestInitRedis:

    def test_init_redis_uses_settings(self):
        from eventplanner.lifespan import init_redis

        env = {"REDIS_HOST": "cache", "REDIS_PORT": "6380"}
        with patch.dict(os.environ, env, clear=True):
            with patch("eventplanner.lifespan.RedisConnectionPool") as mock_pool:
                with patch("eventplanner.lifespan.redis.Redis") as mock_redis:
                    client = init_redis()

        assert client is mock_redis.return_value
        kwargs = mock_pool.call_args.kwargs
        assert kwargs["host"] == "cache"
        assert kwargs["port"] == 6380
        assert kwargs["password"] is None


class TestSetupAndCleanup:

    @pytest.mark.asyncio
    async def test_setup_publishes_store_and_cleanup_clears_it(self):
        from eventplanner.lifespan import cleanup_resources, setup_resources

        with patch.dict(os.environ, {"STORE_BACKEND": "memory"}, clear=True):
            resources = await setup_resources()
        assert state.store is resources.store

        resources.store.close = AsyncMock()
        await cleanup_resources(resources)
        resources.store.close.assert_awaited_once()
        assert state.store is None
