"""Dispatcher that maps CLI actions onto timer and notification operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from notify import NotifyLoop
from pomodoro import PomodoroTimer

from .status import run_status

ACTION_START = "start"
ACTION_STOP = "stop"
ACTION_PAUSE = "pause"
ACTION_CLOCK = "clock"
ACTION_STATUS = "status"
ACTION_NOTIFY = "notify"
ACTION_USAGE = "usage"

ACTIONS: tuple[str, ...] = (
    ACTION_START,
    ACTION_STOP,
    ACTION_PAUSE,
    ACTION_CLOCK,
    ACTION_STATUS,
    ACTION_NOTIFY,
    ACTION_USAGE,
)

# Actions that never return on their own.
LONG_RUNNING_ACTIONS: frozenset[str] = frozenset({ACTION_STATUS, ACTION_NOTIFY})


@dataclass(frozen=True)
class ActionDependencies:
    """Collaborators required to execute CLI actions."""
    timer: PomodoroTimer
    build_notify_loop: Callable[[], NotifyLoop]
    write: Callable[[str], None]
    print_usage: Callable[[], None]
    logger: logging.Logger


class ActionDispatcher:
    """Routes an action name to its handler and returns an exit code."""
    def __init__(self, dependencies: ActionDependencies):
        self._deps = dependencies
        self._handlers: dict[str, Callable[[], int]] = {
            ACTION_START: self._start,
            ACTION_STOP: self._stop,
            ACTION_PAUSE: self._pause,
            ACTION_CLOCK: self._clock,
            ACTION_STATUS: self._status,
            ACTION_NOTIFY: self._notify,
            ACTION_USAGE: self._usage,
        }

    def dispatch(self, action: str) -> int:
        handler = self._handlers.get(action)
        if handler is None:
            raise ValueError(f"Unknown action: {action}")
        self._deps.logger.debug("Dispatching action: %s", action)
        return handler()

    def _start(self) -> int:
        self._deps.timer.start()
        return 0

    def _stop(self) -> int:
        self._deps.timer.stop()
        return 0

    def _pause(self) -> int:
        self._deps.timer.toggle_pause()
        return 0

    def _clock(self) -> int:
        self._deps.write(self._deps.timer.clock())
        return 0

    def _status(self) -> int:
        run_status(self._deps.timer, write=self._deps.write)
        return 0

    def _notify(self) -> int:
        self._deps.build_notify_loop().run()
        return 0

    def _usage(self) -> int:
        self._deps.print_usage()
        return 0
