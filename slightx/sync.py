"""Synchronisation primitives built on explicit wait queues.

The blocking primitives here never put a thread to sleep themselves: when a
caller cannot proceed, its :class:`WaitItem` is queued and a status tells it
to wait. Whoever later releases the resource wakes queued items through
their ``wake`` callbacks.
"""

import enum
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


class SpinLock:
    """A non-reentrant lock without ownership, usable as a context manager."""

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def locked(self):
        return self._lock.locked()

    def acquire(self):
        """Block until the lock is held."""
        self._lock.acquire()

    def try_acquire(self):
        """Take the lock if it is free; return whether it was taken."""
        return self._lock.acquire(blocking=False)

    def release(self):
        """Release the lock. Releasing a free lock raises RuntimeError."""
        try:
            self._lock.release()
        except RuntimeError:
            raise RuntimeError("release of an unlocked spinlock") from None

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class SyncPoint:
    """A countdown that :meth:`wait` blocks on until it reaches zero."""

    def __init__(self):
        self._cond = threading.Condition()
        self._remaining = 0

    @property
    def remaining(self):
        with self._cond:
            return self._remaining

    def set(self, count):
        """Reset the countdown to ``count``."""
        if count < 0:
            raise ValueError("count must not be negative")
        with self._cond:
            self._remaining = count
            self._cond.notify_all()

    def notify(self):
        """Count one arrival; the countdown never drops below zero."""
        with self._cond:
            if self._remaining > 0:
                self._remaining -= 1
            if self._remaining == 0:
                self._cond.notify_all()

    def wait(self):
        """Block until the countdown reaches zero."""
        with self._cond:
            self._cond.wait_for(lambda: self._remaining == 0)


@dataclass(eq=False)
class WaitItem:
    """An entry for a :class:`WaitQueue`; ``wake`` is called when it is woken."""

    wake: Optional[Callable[[], Any]] = None
    _queue: Optional["WaitQueue"] = field(default=None, init=False, repr=False)

    @property
    def queued(self):
        return self._queue is not None

    def _wake(self):
        if self.wake is not None:
            self.wake()


class WaitQueue:
    """A first-in first-out queue of :class:`WaitItem` objects."""

    def __init__(self):
        self._lock = threading.Lock()
        self._items = deque()

    def __len__(self):
        with self._lock:
            return len(self._items)

    def add(self, item):
        """Append ``item``; an item may be in only one queue at a time."""
        with self._lock:
            if item._queue is not None:
                raise ValueError("wait item is already queued")
            item._queue = self
            self._items.append(item)

    def remove(self, item):
        """Remove ``item`` if it is in this queue; otherwise do nothing."""
        with self._lock:
            if item._queue is not self:
                return
            self._items.remove(item)
            item._queue = None

    def wake_one(self):
        """Dequeue the oldest item and wake it. Return the item, or None."""
        with self._lock:
            if not self._items:
                return None
            item = self._items.popleft()
            item._queue = None
        item._wake()
        return item

    def wake_all(self):
        """Dequeue and wake every item in order. Return the woken items."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
            for item in items:
                item._queue = None
        for item in items:
            item._wake()
        return items

    def is_empty(self):
        with self._lock:
            return not self._items


class MutexStatus(enum.Enum):
    ACQUIRED = 0
    SHOULD_WAIT = 1


class Mutex:
    """A mutex recording its owner; contenders queue and are woken on unlock."""

    def __init__(self):
        self._lock = SpinLock()
        self._owner = None
        self._queue = WaitQueue()

    @property
    def owner(self):
        return self._owner

    @property
    def waiters(self):
        return len(self._queue)

    def lock(self, owner, wait):
        """Take the mutex for ``owner``, or queue ``wait`` if it is held."""
        if owner is None:
            raise ValueError("owner is required")
        if wait is None:
            raise ValueError("wait item is required")
        with self._lock:
            if self._owner is None:
                self._owner = owner
                return MutexStatus.ACQUIRED
            self._queue.add(wait)
            return MutexStatus.SHOULD_WAIT

    def try_lock(self, owner):
        """Take the mutex for ``owner`` if it is free; return success."""
        if owner is None:
            raise ValueError("owner is required")
        with self._lock:
            if self._owner is None:
                self._owner = owner
                return True
            return False

    def unlock(self, owner):
        """Free the mutex and wake the oldest waiter."""
        if owner is None:
            raise ValueError("owner is required")
        with self._lock:
            self._owner = None
        self._queue.wake_one()


class SemaphoreStatus(enum.Enum):
    ACQUIRED = 0
    SHOULD_WAIT = 1


class Semaphore:
    """A counting semaphore whose count goes negative by the number of waiters."""

    def __init__(self, initial_count):
        self._lock = SpinLock()
        self._queue = WaitQueue()
        self._count = initial_count

    @property
    def count(self):
        return self._count

    def acquire(self, wait):
        """Take one unit, or queue ``wait`` when none is available."""
        if wait is None:
            raise ValueError("wait item is required")
        with self._lock:
            self._count -= 1
            if self._count >= 0:
                return SemaphoreStatus.ACQUIRED
            self._queue.add(wait)
            return SemaphoreStatus.SHOULD_WAIT

    def try_acquire(self):
        """Take one unit if available; return success."""
        with self._lock:
            if self._count > 0:
                self._count -= 1
                return True
            return False

    def release(self):
        """Return one unit, waking the oldest waiter if any is owed it."""
        with self._lock:
            self._count += 1
            should_wake = self._count <= 0
        if should_wake:
            self._queue.wake_one()


class ConditionVariable:
    """Queues waiters and wakes one or all of them on request."""

    def __init__(self):
        self._lock = SpinLock()
        self._queue = WaitQueue()

    @property
    def waiters(self):
        return len(self._queue)

    def wait(self, item):
        """Queue ``item`` until a signal or broadcast."""
        if item is None:
            raise ValueError("wait item is required")
        with self._lock:
            self._queue.add(item)

    def signal(self):
        """Wake the oldest waiter."""
        self._queue.wake_one()

    def broadcast(self):
        """Wake every waiter."""
        self._queue.wake_all()