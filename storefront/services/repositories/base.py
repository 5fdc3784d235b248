"""Base repository with shared Supabase client."""
import asyncio
from typing import Any, Callable

from supabase import Client


class BaseRepository:
    """Base class for all repositories.

    The Supabase client is synchronous; queries run in a worker thread so
    callers can await them without blocking the event loop.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    async def _run(self, query: Callable[[], Any]) -> Any:
        return await asyncio.to_thread(query)
