"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Supabase client for the hosted relational store (products, orders, reviews, profiles)
- Upstash Redis client for server-side cart storage
"""

import os
from typing import Optional

from supabase import Client, create_client
from upstash_redis import Redis


# Singleton instances
_supabase_client: Optional[Client] = None
_redis_client: Optional[Redis] = None


def get_supabase() -> Client:
    """
    Get Supabase client (singleton).

    Requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.
    """
    global _supabase_client

    if _supabase_client is None:
        url = os.environ.get("SUPABASE_URL", "")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _supabase_client = create_client(url, key)

    return _supabase_client


def get_redis() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN

    Cart mutations are synchronous, so only the sync client is needed.
    """
    global _redis_client

    if _redis_client is None:
        url = os.environ.get("UPSTASH_REDIS_REST_URL", "")
        token = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
        if not url or not token:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = Redis(url=url, token=token)

    return _redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    # Cart storage
    CART = "cart:"  # cart:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = 86400  # 24 hours
