"""A callback scheduled to run after an interval."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from rocketrpc.log import debug_log
from rocketrpc.util import get_now_ms


@dataclass(eq=False)
class TimerEvent:
    """Runs callback once interval milliseconds have passed, optionally repeating."""

    interval: int
    is_repeated: bool
    callback: Optional[Callable[[], None]]
    cancelled: bool = field(default=False, init=False)
    arrive_time: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.reset_arrive_time()

    def reset_arrive_time(self) -> None:
        """Schedule the event interval milliseconds from now."""
        self.arrive_time = get_now_ms() + self.interval
        debug_log("success create timer event,will execute at[%d]", self.arrive_time)