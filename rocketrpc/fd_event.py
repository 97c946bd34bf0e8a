"""File descriptor events and the wake-up channel of an event loop."""

from __future__ import annotations

import os
import socket
from enum import IntFlag
from typing import Callable, Optional

from rocketrpc.log import debug_log, error_log

Callback = Optional[Callable[[], None]]


class TriggerEvent(IntFlag):
    """Kinds of readiness an FdEvent can be interested in."""

    IN_EVENT = 0x001
    OUT_EVENT = 0x004
    ERROR_EVENT = 0x008


class FdEvent:
    """Callbacks to run when a file descriptor becomes readable or writable."""

    def __init__(self, fd: int = -1) -> None:
        self.fd = fd
        self.events = TriggerEvent(0)
        self.read_callback: Callback = None
        self.write_callback: Callback = None
        self.error_callback: Callback = None

    def handler(self, event: TriggerEvent) -> Callback:
        """Return the callback registered for the given kind of event."""
        if event == TriggerEvent.IN_EVENT:
            return self.read_callback
        if event == TriggerEvent.OUT_EVENT:
            return self.write_callback
        if event == TriggerEvent.ERROR_EVENT:
            return self.error_callback
        return None

    def listen(
        self,
        event_type: TriggerEvent,
        callback: Callback,
        error_callback: Callback = None,
    ) -> None:
        """Watch for event_type; anything but IN_EVENT means OUT_EVENT."""
        if event_type == TriggerEvent.IN_EVENT:
            self.events |= TriggerEvent.IN_EVENT
            self.read_callback = callback
        else:
            self.events |= TriggerEvent.OUT_EVENT
            self.write_callback = callback
        self.error_callback = error_callback

    def cancel(self, event_type: TriggerEvent) -> None:
        """Stop watching for event_type."""
        if event_type == TriggerEvent.IN_EVENT:
            self.events &= ~TriggerEvent.IN_EVENT
        elif event_type == TriggerEvent.OUT_EVENT:
            self.events &= ~TriggerEvent.OUT_EVENT

    def set_non_block(self) -> None:
        """Put the descriptor into non-blocking mode."""
        if os.get_blocking(self.fd):
            os.set_blocking(self.fd, False)


class WakeUpFdEvent(FdEvent):
    """A socket pair used to interrupt a waiting event loop."""

    _SIGNAL = b"a" + b"\0" * 7

    def __init__(self) -> None:
        self._reader, self._writer = socket.socketpair()
        self._reader.setblocking(False)
        self._writer.setblocking(False)
        super().__init__(self._reader.fileno())

    def wakeup(self) -> None:
        """Make the reading end readable."""
        try:
            sent = self._writer.send(self._SIGNAL)
        except OSError as exc:
            error_log("write to wakeup fd failed,fd[%d],error[%s]", self.fd, exc)
            return
        if sent != len(self._SIGNAL):
            error_log("write to wakeup fd less than 8 bytes,fd[%d]", self.fd)
            return
        debug_log("success write 8 bytes")

    def drain(self) -> None:
        """Read everything pending on the reading end."""
        while True:
            try:
                data = self._reader.recv(8)
            except (BlockingIOError, InterruptedError):
                break
            except OSError:
                break
            if not data:
                break
        debug_log("read full bytes from wakeup fd[%d]", self.fd)

    def close(self) -> None:
        """Close both ends of the pair."""
        self._reader.close()
        self._writer.close()