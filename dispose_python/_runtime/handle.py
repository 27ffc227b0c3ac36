"""
Handle table for simulated unmanaged (OS-level) handles.

A handle is an opaque integer. ``NULL_HANDLE`` marks a released or absent
handle. Every allocated handle must be freed exactly once.
"""

from typing import Set
import logging

logger = logging.getLogger(__name__)

NULL_HANDLE = 0


class CountIdAllocator:
    """Simple counting ID allocator."""

    def __init__(self, initial_next: int = 1):
        self.next = initial_next

    def acquire(self) -> int:
        result = self.next
        self.next += 1
        return result


class HandleTable:
    """
    Tracks live and freed handles.

    IDs are never reused, so any issued ID that is no longer live was
    freed. Only live handles are stored.
    """

    def __init__(self):
        self._allocator = CountIdAllocator(NULL_HANDLE + 1)
        self._live: Set[int] = set()
        self._freed_count = 0

    @property
    def live_count(self) -> int:
        return len(self._live)

    @property
    def freed_count(self) -> int:
        return self._freed_count

    def allocate(self) -> int:
        """Allocate a new handle and return its ID."""
        handle = self._allocator.acquire()
        self._live.add(handle)
        logger.debug("Allocated handle %#x", handle)
        return handle

    def free(self, handle: int) -> None:
        """
        Free a live handle.

        Raises ValueError for the null handle, an unknown handle or a
        handle that was already freed.
        """
        if handle == NULL_HANDLE:
            raise ValueError("Cannot free the null handle")
        if handle not in self._live:
            if NULL_HANDLE < handle < self._allocator.next:
                raise ValueError(f"Handle {handle:#x} was already freed")
            raise ValueError(f"Unknown handle {handle:#x}")
        self._live.remove(handle)
        self._freed_count += 1
        logger.debug("Freed handle %#x", handle)

    def is_live(self, handle: int) -> bool:
        return handle in self._live

    def __repr__(self):
        return f"<HandleTable live={self.live_count} freed={self.freed_count}>"


# Shared table used when callers do not supply their own
default_handle_table = HandleTable()
