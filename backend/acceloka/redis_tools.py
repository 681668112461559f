# backend/acceloka/redis_tools.py
import os
import logging

import redis.asyncio as redis_client

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
AVAILABILITY_TTL_SECONDS = int(os.getenv("AVAILABILITY_TTL_SECONDS", 60))

# An empty REDIS_URL disables the mirror entirely.
redis = redis_client.from_url(REDIS_URL, encoding="utf-8", decode_responses=True) if REDIS_URL else None


def availability_key(ticket_code: str) -> str:
    return f"ticket:{ticket_code}:available"


async def get_cached_available_quota(ticket_code: str) -> int | None:
    """
    Read the mirrored available quota for a ticket.
    Returns None if the key is missing, redis is disabled or redis errored
    (caller falls back to the database).
    """
    if redis is None:
        return None
    try:
        val = await redis.get(availability_key(ticket_code))
        return int(val) if val is not None else None
    except Exception as exc:
        logging.exception("Redis error in get_cached_available_quota: %s", exc)
        return None


async def cache_available_quota(ticket_code: str, available: int) -> None:
    """
    Mirror a freshly computed available quota (best-effort).
    """
    if redis is None:
        return
    try:
        await redis.set(availability_key(ticket_code), int(available), ex=AVAILABILITY_TTL_SECONDS)
    except Exception as exc:
        logging.exception("Redis error in cache_available_quota: %s", exc)
        # best-effort; swallow


async def invalidate_available_quota(*ticket_codes: str) -> None:
    """
    Drop mirrored values after a committed booking, revoke or edit (best-effort).
    """
    if redis is None or not ticket_codes:
        return
    try:
        await redis.delete(*(availability_key(code) for code in ticket_codes))
    except Exception as exc:
        logging.exception("Redis error in invalidate_available_quota: %s", exc)
        # best-effort; swallow
