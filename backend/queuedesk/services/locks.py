"""Per (owner, staff, calendar day) locks for named-staff bookings."""

import asyncio
import weakref
from contextlib import AsyncExitStack, asynccontextmanager
from datetime import date
from typing import AsyncIterator, Iterable, Tuple


class StaffDayLocks:
    """Registry handing out one ``asyncio.Lock`` per staff member and day.

    Entries are weakly held and disappear once no coroutine references the
    lock any more.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Tuple[int, int, date], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def get(self, owner_id: int, staff_id: int, day: date) -> asyncio.Lock:
        key = (owner_id, staff_id, day)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, owner_id: int, staff_id: int, days: Iterable[date]) -> AsyncIterator[None]:
        """Hold the locks of every given day, always taken in date order."""
        async with AsyncExitStack() as stack:
            for day in sorted(set(days)):
                await stack.enter_async_context(self.get(owner_id, staff_id, day))
            yield

    def __len__(self) -> int:
        return len(self._locks)


staff_day_locks = StaffDayLocks()
