"""File-backed pomodoro state engine shared by independent CLI invocations."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from .constants import STOPPED_CLOCK
from .cycle import cycle_position, format_clock
from .record import PausedRecord, RecordStore, RunningRecord, TimerRecord


class PomodoroTimer:
    """Work/break cycle timer whose only state is the record file.

    Nothing is cached between calls: every query re-reads the record so that
    a pause or restart made by another process is seen immediately.
    """

    def __init__(
        self,
        *,
        work_seconds: int,
        break_seconds: int,
        record_path: str | Path | None = None,
        store: Optional[RecordStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if work_seconds <= 0:
            raise ValueError("work_seconds must be greater than zero")
        if break_seconds <= 0:
            raise ValueError("break_seconds must be greater than zero")
        if store is None and record_path is None:
            raise ValueError("record_path or store is required")

        self._work_seconds = int(work_seconds)
        self._break_seconds = int(break_seconds)
        self._logger = logger or logging.getLogger("pomodoro")
        self._store = store or RecordStore(record_path, logger=self._logger)

    @classmethod
    def from_settings(
        cls,
        settings,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "PomodoroTimer":
        return cls(
            work_seconds=settings.work_seconds,
            break_seconds=settings.break_seconds,
            record_path=settings.record_file,
            logger=logger,
        )

    @property
    def work_seconds(self) -> int:
        return self._work_seconds

    @property
    def break_seconds(self) -> int:
        return self._break_seconds

    @property
    def block_seconds(self) -> int:
        return self._work_seconds + self._break_seconds

    @property
    def store(self) -> RecordStore:
        return self._store

    def start(self) -> RunningRecord:
        record = self._store.write_running(_now())
        self._logger.info("Pomodoro started: record=%s", self._store.path)
        return record

    def stop(self) -> None:
        self._store.delete()
        self._logger.info("Pomodoro stopped: record=%s", self._store.path)

    def is_stopped(self) -> bool:
        return not self._store.exists()

    def is_paused(self) -> bool:
        return isinstance(self._store.read(), PausedRecord)

    def elapsed(self) -> int:
        """Seconds since the current block started, excluding paused time."""
        return _elapsed_seconds(self._store.read(), _now())

    def toggle_pause(self) -> TimerRecord:
        """Pause a running timer, or resume a paused or stopped one.

        A running record is realigned first so a pause never stores a full
        block or more of elapsed time.
        """
        self.update()
        now = _now()
        record = self._store.read()
        running = _elapsed_seconds(record, now)

        if record is None or isinstance(record, PausedRecord):
            resumed = self._store.write_running(now - running)
            self._logger.info("Pomodoro resumed: elapsed=%ss", running)
            return resumed

        paused = self._store.write_paused(running)
        self._logger.info("Pomodoro paused: elapsed=%ss", running)
        return paused

    def update(self) -> bool:
        """Rebase a running record once at least one full block has elapsed.

        The position inside the block is preserved. Returns whether the record
        was touched; paused and stopped timers are never modified.
        """
        record = self._store.read()
        if not isinstance(record, RunningRecord):
            return False

        now = _now()
        running = _elapsed_seconds(record, now)
        if running < self.block_seconds:
            return False

        started_at = now - running % self.block_seconds
        self._store.restamp(started_at)
        self._logger.debug(
            "Pomodoro realigned: started_at %s -> %s",
            record.started_at,
            started_at,
        )
        return True

    def clock(self) -> str:
        """Remaining time in the current phase, e.g. ' W24:08' or 'PB03:55'."""
        if self.is_stopped():
            return STOPPED_CLOCK

        self.update()
        record = self._store.read()
        if record is None:
            # Stopped by another invocation between the two reads.
            return STOPPED_CLOCK
        position = cycle_position(
            _elapsed_seconds(record, _now()),
            self._work_seconds,
            self._break_seconds,
        )
        return format_clock(position, paused=isinstance(record, PausedRecord))


def _now() -> int:
    return int(time.time())


def _elapsed_seconds(record: Optional[TimerRecord], now: int) -> int:
    if record is None:
        return 0
    if isinstance(record, PausedRecord):
        return record.elapsed_seconds
    return max(0, now - record.started_at)
