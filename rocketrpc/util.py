"""Process, thread, clock and byte-order helpers."""

from __future__ import annotations

import os
import struct
import threading
import time

_INT32 = struct.Struct("!i")


def get_pid() -> int:
    """Return the current process id."""
    return os.getpid()


def get_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def get_now_ms() -> int:
    """Return the wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def get_int32_from_net_bytes(buf: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a signed 32-bit big-endian integer from buf at offset."""
    return _INT32.unpack_from(buf, offset)[0]