"""
Per-key mutual exclusion.

Remote read-then-write sequences against one document are not atomic, so
callers serialize them per document ID through a LockArena.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

logger = logging.getLogger(__name__)


class LockArena:
    """
    Arena of asyncio locks indexed by key.

    A lock is created on first use and kept for the life of the arena, so
    two callers asking for the same key always get the same lock. All users
    of one arena must run on the same event loop.
    """

    def __init__(self, name: str = 'locks'):
        """
        Initialize lock arena.

        Args:
            name: Label used in log messages
        """
        self.name = name
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for key for the duration of the block."""
        lock = self.lock_for(key)
        if lock.locked():
            logger.debug(f"Waiting for {self.name} lock on {key}")
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)

    def __contains__(self, key: str) -> bool:
        return key in self._locks
