"""A growable byte buffer with separate read and write positions."""

from __future__ import annotations

from rocketrpc.log import error_log


class TcpBuffer:
    """Bytes are appended at the write index and consumed from the read index.

    The readable region is buffer[read_index:write_index].
    """

    def __init__(self, size: int = 128) -> None:
        if size < 0:
            raise ValueError(f"buffer size must not be negative, got {size}")
        self.buffer = bytearray(size)
        self._read_index = 0
        self._write_index = 0

    @property
    def read_index(self) -> int:
        return self._read_index

    @property
    def write_index(self) -> int:
        return self._write_index

    @property
    def read_able(self) -> int:
        """Number of bytes that can be read."""
        return self._write_index - self._read_index

    @property
    def write_able(self) -> int:
        """Number of bytes that fit before the buffer must grow."""
        return len(self.buffer) - self._write_index

    @property
    def capacity(self) -> int:
        return len(self.buffer)

    def peek(self) -> bytes:
        """Return the readable bytes without consuming them."""
        return bytes(self.buffer[self._read_index:self._write_index])

    def write_to_buffer(self, data: bytes | bytearray | memoryview) -> None:
        """Append data, growing the buffer if it does not fit."""
        size = len(data)
        if size > self.write_able:
            self.resize_buffer(int(1.5 * (self._write_index + size)))
        self.buffer[self._write_index:self._write_index + size] = data
        self._write_index += size

    def read_from_buffer(self, size: int) -> bytes:
        """Consume and return up to size readable bytes."""
        if size < 0:
            raise ValueError(f"read size must not be negative, got {size}")
        count = min(size, self.read_able)
        if count == 0:
            return b""
        start = self._read_index
        self._read_index += count
        return bytes(self.buffer[start:start + count])

    def resize_buffer(self, new_size: int) -> None:
        """Reallocate to new_size bytes, keeping as much readable data as fits."""
        if new_size < 0:
            raise ValueError(f"buffer size must not be negative, got {new_size}")
        count = min(new_size, self.read_able)
        resized = bytearray(new_size)
        resized[:count] = self.buffer[self._read_index:self._read_index + count]
        self.buffer = resized
        self._read_index = 0
        self._write_index = count
        self.adjust_buffer()

    def adjust_buffer(self) -> None:
        """Move readable data to the front once a third of the buffer is consumed."""
        if self._read_index < len(self.buffer) // 3:
            return
        count = self.read_able
        compacted = bytearray(len(self.buffer))
        compacted[:count] = self.buffer[self._read_index:self._write_index]
        self.buffer = compacted
        self._read_index = 0
        self._write_index = count

    def move_read_index(self, size: int) -> None:
        """Discard size readable bytes."""
        target = self._read_index + size
        if size < 0 or target > self._write_index:
            error_log(
                "moveReadIndex error,invalid size %d old_read_index %d,buffer size %d",
                size, self._read_index, len(self.buffer),
            )
            raise ValueError(
                f"cannot move read index by {size} from {self._read_index}"
            )
        self._read_index = target
        self.adjust_buffer()

    def move_write_index(self, size: int) -> None:
        """Mark size bytes after the write index as written."""
        target = self._write_index + size
        if size < 0 or target > len(self.buffer):
            error_log(
                "moveWriteIndex error,invalid size %d old_write_index %d,buffer size %d",
                size, self._write_index, len(self.buffer),
            )
            raise ValueError(
                f"cannot move write index by {size} from {self._write_index}"
            )
        self._write_index = target
        self.adjust_buffer()