"""
Unit tests for the Redis cache wrapper's degraded modes.
"""
import pytest

from app.cache.redis_client import RedisCache, roster_key


@pytest.mark.unit
@pytest.mark.asyncio
class TestRedisCache:

    async def test_disabled_cache_is_always_a_miss(self):
        cache = RedisCache(enabled=False)

        assert await cache.set("k", [1, 2]) is False
        assert await cache.get("k") is None
        assert await cache.delete("k") is False

    async def test_unreachable_redis_degrades_to_miss(self):
        cache = RedisCache(url="redis://127.0.0.1:1/0", enabled=True)

        assert await cache.get("k") is None
        assert await cache.set("k", {"a": 1}) is False


@pytest.mark.unit
def test_roster_key_is_scoped_per_event():
    assert roster_key("abc") == "rsvps:attendees:abc"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_releases_the_async_client():
    class ClosingClient:
        closed = False

        async def aclose(self):
            self.closed = True

    cache = RedisCache(enabled=True)
    await cache.close()

    client = ClosingClient()
    cache._client = client
    await cache.close()

    assert client.closed is True
    assert cache._client is None
