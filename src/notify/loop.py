"""Blocking loop that raises one notification at every work/break boundary.

There is no lock shared with the processes that start, pause, or stop the
timer. A wake-up after sleeping is only a hint: the loop re-reads the record
and fires only if the boundary really passed, otherwise it recomputes.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Literal, Optional

from pomodoro import StorageUnavailableError, cycle_position

from .contracts import Notifier, TimerLike
from .messages import boundary_message
from .notifiers import NotificationError

LoopState = Literal["waiting_for_session", "waiting_for_boundary"]

STATE_WAITING_FOR_SESSION: LoopState = "waiting_for_session"
STATE_WAITING_FOR_BOUNDARY: LoopState = "waiting_for_boundary"

DEFAULT_POLL_INTERVAL_SECONDS = 60
DEFAULT_SLACK_SECONDS = 1
# Keeps the next reference instant strictly after the boundary just handled.
POST_NOTIFY_SLEEP_SECONDS = 1


class NotifyLoop:
    """Polls for a timer session and notifies at each phase boundary."""

    def __init__(
        self,
        timer: TimerLike,
        notifier: Notifier,
        *,
        poll_interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS,
        slack_seconds: int = DEFAULT_SLACK_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be greater than zero")
        if slack_seconds < 0:
            raise ValueError("slack_seconds must be >= 0")

        self._timer = timer
        self._notifier = notifier
        self._poll_interval_seconds = poll_interval_seconds
        self._slack_seconds = slack_seconds
        self._sleep = sleep
        self._logger = logger or logging.getLogger("notify")
        self._state: LoopState = STATE_WAITING_FOR_SESSION

    @property
    def state(self) -> LoopState:
        return self._state

    def run(self) -> None:
        """Run forever; returns only by exception."""
        self._logger.info(
            "Notification loop started (poll interval %ss)",
            self._poll_interval_seconds,
        )
        while True:
            self.run_once()

    def run_once(self) -> bool:
        """One outer iteration; returns whether a notification fired."""
        try:
            stopped = self._timer.is_stopped()
        except StorageUnavailableError as error:
            self._logger.warning("Timer record unavailable: %s", error)
            stopped = True

        if stopped:
            self._enter(STATE_WAITING_FOR_SESSION)
            self._sleep(self._poll_interval_seconds)
            return False

        try:
            fired = self.wait_for_boundary()
        except StorageUnavailableError as error:
            self._logger.warning("Timer record unavailable: %s", error)
            self._enter(STATE_WAITING_FOR_SESSION)
            self._sleep(self._poll_interval_seconds)
            return False

        self._sleep(POST_NOTIFY_SLEEP_SECONDS)
        return fired

    def wait_for_boundary(self) -> bool:
        """Sleep until the next phase boundary and notify once it is confirmed.

        Returns False without notifying when the timer was stopped during the
        wait or the confirmed boundary is more than `slack_seconds` stale.
        """
        self._enter(STATE_WAITING_FOR_BOUNDARY)
        timer = self._timer
        while True:
            timer.update()
            running = timer.elapsed()
            position = cycle_position(running, timer.work_seconds, timer.break_seconds)
            left = position.remaining_seconds
            self._logger.debug(
                "Waiting %ss for end of %s period (elapsed=%ss)",
                left,
                position.phase,
                running,
            )

            self._sleep(left)

            if timer.is_stopped():
                self._logger.info("Timer stopped while waiting for a boundary")
                return False
            stat = timer.elapsed()
            if stat >= running + left:
                break
            # Only a break may legitimately end with elapsed time starting over:
            # another process rebased the record for the next block.
            if not position.is_work and stat < running:
                break
            self._logger.debug(
                "Boundary not reached (elapsed=%ss, expected>=%ss); recomputing",
                stat,
                running + left,
            )

        drift = stat - running - left
        if drift > self._slack_seconds:
            self._logger.info(
                "Skipping stale end of %s notification (drift=%ss)",
                position.phase,
                drift,
            )
            return False

        message = boundary_message(position.phase)
        try:
            self._notifier.notify(message)
        except NotificationError as error:
            self._logger.error("Notification delivery failed: %s", error)
            return False
        self._logger.info("Notified end of %s period", position.phase)
        return True

    def _enter(self, state: LoopState) -> None:
        if state != self._state:
            self._logger.debug("Notify loop state: %s -> %s", self._state, state)
            self._state = state
