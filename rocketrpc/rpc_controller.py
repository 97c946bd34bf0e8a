"""Per-call RPC state and completion callbacks."""

from __future__ import annotations

from typing import Callable, Optional

from rocketrpc.net_addr import NetAddr

_DEFAULT_TIMEOUT_MS = 1000


class RpcController:
    """Carries the error state, message id, addresses and timeout of one call."""

    def __init__(self) -> None:
        self.error_code = 0
        self.error_info = ""
        self.msg_id = ""
        self.local_addr: Optional[NetAddr] = None
        self.peer_addr: Optional[NetAddr] = None
        self.timeout = _DEFAULT_TIMEOUT_MS
        self._failed = False
        self._canceled = False

    def reset(self) -> None:
        """Return the controller to its initial state."""
        self.error_code = 0
        self.error_info = ""
        self.msg_id = ""
        self._failed = False
        self._canceled = False
        self.local_addr = None
        self.peer_addr = None
        self.timeout = _DEFAULT_TIMEOUT_MS

    def failed(self) -> bool:
        """Whether set_error() was called."""
        return self._failed

    def error_text(self) -> str:
        return self.error_info

    def start_cancel(self) -> None:
        self._canceled = True

    def set_failed(self, reason: str) -> None:
        """Record a reason; this alone does not mark the call as failed."""
        self.error_info = reason

    def is_canceled(self) -> bool:
        return self._canceled

    def notify_on_cancel(self, callback: Optional[Callable[[], None]]) -> None:
        """Cancellation callbacks are not supported; the callback is ignored."""

    def set_error(self, error_code: int, error_info: str) -> None:
        """Mark the call as failed with a code and a description."""
        self.error_code = error_code
        self.error_info = error_info
        self._failed = True


class RpcClosure:
    """Wraps a callable to run when a call completes."""

    def __init__(self, cb: Optional[Callable[[], None]]) -> None:
        self._cb = cb

    def run(self) -> None:
        if self._cb is not None:
            self._cb()