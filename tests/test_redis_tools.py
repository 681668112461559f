"""Tests for the best-effort availability mirror."""

from unittest.mock import AsyncMock

import pytest

from acceloka import redis_tools


@pytest.fixture
def fake_redis(monkeypatch):
    client = AsyncMock()
    monkeypatch.setattr(redis_tools, "redis", client)
    return client


async def test_disabled_mirror_is_a_miss():
    # REDIS_URL is empty under test
    assert redis_tools.redis is None
    assert await redis_tools.get_cached_available_quota("T1") is None
    await redis_tools.cache_available_quota("T1", 3)
    await redis_tools.invalidate_available_quota("T1")


async def test_cached_value_is_read_as_int(fake_redis):
    fake_redis.get.return_value = "5"
    assert await redis_tools.get_cached_available_quota("T1") == 5
    fake_redis.get.assert_awaited_once_with("ticket:T1:available")


async def test_missing_key_is_a_miss(fake_redis):
    fake_redis.get.return_value = None
    assert await redis_tools.get_cached_available_quota("T1") is None


async def test_redis_errors_are_swallowed(fake_redis):
    fake_redis.get.side_effect = ConnectionError("down")
    fake_redis.set.side_effect = ConnectionError("down")
    fake_redis.delete.side_effect = ConnectionError("down")

    assert await redis_tools.get_cached_available_quota("T1") is None
    await redis_tools.cache_available_quota("T1", 3)
    await redis_tools.invalidate_available_quota("T1")


async def test_cache_sets_ttl(fake_redis):
    await redis_tools.cache_available_quota("T1", 4)
    fake_redis.set.assert_awaited_once_with(
        "ticket:T1:available", 4, ex=redis_tools.AVAILABILITY_TTL_SECONDS
    )


async def test_invalidate_drops_every_key(fake_redis):
    await redis_tools.invalidate_available_quota("T1", "T2")
    fake_redis.delete.assert_awaited_once_with("ticket:T1:available", "ticket:T2:available")


async def test_invalidate_without_codes_does_nothing(fake_redis):
    await redis_tools.invalidate_available_quota()
    fake_redis.delete.assert_not_called()
