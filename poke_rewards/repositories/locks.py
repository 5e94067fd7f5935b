"""
Per-player asyncio locks.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class PlayerLocks:
    """
    Registry of per-player locks.

    A lock lives only while some task holds or waits for it, so the
    registry does not grow with the number of players ever seen.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, player_id: str) -> AsyncIterator[None]:
        """Hold the player's lock for the duration of the block."""
        lock = self._locks.get(player_id)
        if lock is None:
            lock = self._locks[player_id] = asyncio.Lock()
        self._holders[player_id] = self._holders.get(player_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[player_id] -= 1
            if not self._holders[player_id]:
                del self._holders[player_id]
                del self._locks[player_id]
