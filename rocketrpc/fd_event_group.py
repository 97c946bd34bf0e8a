"""A growable table of FdEvent objects indexed by descriptor number."""

from __future__ import annotations

import threading

from rocketrpc.fd_event import FdEvent


class FdEventGroup:
    """Holds one FdEvent per descriptor, created on demand."""

    def __init__(self, size: int = 128) -> None:
        self._lock = threading.Lock()
        self._group = [FdEvent(fd) for fd in range(size)]

    def __len__(self) -> int:
        return len(self._group)

    def get_fd_event(self, fd: int) -> FdEvent:
        """Return the FdEvent for fd, growing the table if needed."""
        with self._lock:
            if fd >= len(self._group):
                new_size = max(int(fd * 1.5), fd + 1)
                self._group.extend(FdEvent(i) for i in range(len(self._group), new_size))
            return self._group[fd]


_global_group: FdEventGroup | None = None
_global_lock = threading.Lock()


def get_fd_event_group() -> FdEventGroup:
    """Return the process-wide FdEventGroup."""
    global _global_group
    with _global_lock:
        if _global_group is None:
            _global_group = FdEventGroup(128)
        return _global_group