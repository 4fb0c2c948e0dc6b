"""
Per-key mutual exclusion with deadlines.

Mutations that touch the same vehicle (or customer) run one at a time;
reads never take a lock. Every mutation carries a Deadline covering lock
waits and validation reads, checked once more right before the write.
"""
import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable, Optional

from rental.core.exceptions import DeadlineExceededError


def vehicle_key(vehicle_id: int) -> tuple:
    return ("vehicle", vehicle_id)


def customer_key(customer_id: int) -> tuple:
    return ("customer", customer_id)


def license_key(license_number: str) -> tuple:
    return ("license", license_number.strip().upper())


class Deadline:
    """Absolute expiry for one mutating call. ``None`` timeout means no limit."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._expires_at = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return self._expires_at - time.monotonic()

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self) -> None:
        if self.expired:
            raise DeadlineExceededError(
                f"Operation exceeded its {self.timeout:g}s deadline"
            )

    async def wait_for(self, awaitable):
        remaining = self.remaining()
        if remaining is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, max(remaining, 0))
        except asyncio.TimeoutError:
            raise DeadlineExceededError(
                f"Operation exceeded its {self.timeout:g}s deadline"
            ) from None


class KeyedLock:
    """
    Registry of asyncio locks, one per key.

    An entry lives only while some caller holds or waits on its key, so the
    registry never outgrows the number of mutations in flight.
    """

    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._users: Dict[Hashable, int] = {}

    def _checkout(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
            self._users[key] = 0
        self._users[key] += 1
        return lock

    def _checkin(self, key: Hashable) -> None:
        self._users[key] -= 1
        if self._users[key] == 0:
            del self._users[key]
            del self._locks[key]

    def locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, *keys: Hashable, deadline: Optional[Deadline] = None) -> AsyncIterator[None]:
        """
        Acquire the locks for ``keys`` in the given order.

        Callers must pass keys in a fixed global order (vehicle before
        customer) so two holders never wait on each other.
        """
        deadline = deadline or Deadline()
        checked_out = []
        acquired = []
        try:
            for key in keys:
                lock = self._checkout(key)
                checked_out.append(key)
                await deadline.wait_for(lock.acquire())
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in checked_out:
                self._checkin(key)
