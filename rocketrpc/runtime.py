"""Per-thread request context."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass
class RunTime:
    """Identifies the request the current thread is handling."""

    msg_id: str = ""
    method_name: str = ""


_local = threading.local()


def get_run_time() -> RunTime:
    """Return the calling thread's RunTime, creating it on first use."""
    run_time = getattr(_local, "run_time", None)
    if run_time is None:
        run_time = RunTime()
        _local.run_time = run_time
    return run_time