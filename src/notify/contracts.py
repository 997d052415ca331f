"""Protocols describing the timer and delivery capabilities used by the notify loop."""

from __future__ import annotations

from typing import Protocol


class TimerLike(Protocol):
    """Subset of `PomodoroTimer` the notification loop reads."""
    work_seconds: int
    break_seconds: int

    def is_stopped(self) -> bool:
        ...

    def elapsed(self) -> int:
        ...

    def update(self) -> bool:
        ...


class Notifier(Protocol):
    """Emits one user-visible message."""
    def notify(self, message: str) -> None:
        ...
