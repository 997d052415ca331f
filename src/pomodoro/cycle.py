"""Pure work/break cycle arithmetic and clock formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .constants import (
    CLOCK_FORMAT,
    PHASE_BREAK,
    PHASE_PREFIXES,
    PHASE_WORK,
    PREFIX_PAUSED,
)

PomodoroPhase = Literal["work", "break"]


@dataclass(frozen=True)
class CyclePosition:
    """Where an elapsed duration falls inside one work+break block."""
    phase: PomodoroPhase
    position_seconds: int
    remaining_seconds: int

    @property
    def is_work(self) -> bool:
        return self.phase == PHASE_WORK


def cycle_position(elapsed_seconds: int, work_seconds: int, break_seconds: int) -> CyclePosition:
    if work_seconds <= 0 or break_seconds <= 0:
        raise ValueError("work_seconds and break_seconds must be greater than zero")

    block_seconds = work_seconds + break_seconds
    position = max(0, int(elapsed_seconds)) % block_seconds
    if position < work_seconds:
        return CyclePosition(
            phase=PHASE_WORK,
            position_seconds=position,
            remaining_seconds=work_seconds - position,
        )
    return CyclePosition(
        phase=PHASE_BREAK,
        position_seconds=position,
        remaining_seconds=block_seconds - position,
    )


def format_clock(position: CyclePosition, *, paused: bool = False) -> str:
    """Render `position` as e.g. ' W24:08' or 'PB03:55'."""
    prefix = PHASE_PREFIXES[position.phase]
    if paused:
        prefix = PREFIX_PAUSED + prefix
    minutes, seconds = divmod(position.remaining_seconds, 60)
    return CLOCK_FORMAT % (prefix, minutes, seconds)
