"""Continuous clock printer behind the `status` action."""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

STATUS_INTERVAL_SECONDS = 1.0


class ClockLike(Protocol):
    def clock(self) -> str:
        ...


def run_status(
    timer: ClockLike,
    *,
    write: Callable[[str], None],
    sleep: Callable[[float], None] = time.sleep,
    interval_seconds: float = STATUS_INTERVAL_SECONDS,
    iterations: Optional[int] = None,
) -> None:
    """Write the clock every `interval_seconds`; forever unless `iterations` is set."""
    count = 0
    while iterations is None or count < iterations:
        write(timer.clock())
        count += 1
        sleep(interval_seconds)
