import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from personapi.core.exceptions import StoreLockError

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Asyncio reader/writer lock.

    Any number of readers may hold the lock together, a writer holds it alone.
    A waiting writer keeps new readers out so writes are not starved.
    An exception escaping a write section poisons the lock unless its type is
    listed in ``passthrough``; every later acquire raises StoreLockError.
    """

    def __init__(self, passthrough: tuple[type[BaseException], ...] = ()):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._poisoned = False
        self._passthrough = passthrough

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @property
    def readers(self) -> int:
        return self._readers

    def _check_poisoned(self):
        if self._poisoned:
            raise StoreLockError()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            self._check_poisoned()
            await self._cond.wait_for(
                lambda: self._poisoned or not (self._writer or self._writers_waiting)
            )
            self._check_poisoned()
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._check_poisoned()
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: self._poisoned or not (self._writer or self._readers)
                )
            finally:
                self._writers_waiting -= 1
            if self._poisoned:
                self._cond.notify_all()
                raise StoreLockError()
            self._writer = True
        try:
            yield
        except self._passthrough:
            raise
        except Exception as e:
            self._poisoned = True
            logger.error(f"Write section failed, lock poisoned: {e}")
            raise
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()
