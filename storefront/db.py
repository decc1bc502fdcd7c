"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Async Supabase client for product lookups
- Sync Supabase client for order recording at checkout
- Sync Upstash Redis client for cart snapshots
"""

import os
from typing import Optional

from supabase import create_client, Client
from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis import Redis


SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Upstash uses REST_URL and REST_TOKEN
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_supabase_client: Optional[Client] = None
_async_supabase_client: Optional[AsyncClient] = None
_sync_redis_client: Optional[Redis] = None


def get_supabase_sync() -> Client:
    """
    Get synchronous Supabase client (singleton).
    Used by checkout, which runs inside the synchronous cart store.
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _supabase_client = create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _supabase_client


async def get_supabase() -> AsyncClient:
    """Get async Supabase client (singleton)."""
    global _async_supabase_client

    if _async_supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _async_supabase_client = await acreate_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _async_supabase_client


def redis_configured() -> bool:
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Cart operations are synchronous end to end, so the cart snapshot
    backend uses the blocking client.
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes."""

    CART = "cart:"  # cart:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"
