"""Timer record variants and the file-backed store shared by all invocations.

The record file encodes its own state: no file means stopped, an empty file
means running since the file's modification time, and a file holding one
integer means paused with that many elapsed seconds.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import MalformedRecordError, StorageUnavailableError


@dataclass(frozen=True)
class RunningRecord:
    """Timer is counting; elapsed time is measured from `started_at`."""
    started_at: int


@dataclass(frozen=True)
class PausedRecord:
    """Timer is frozen with `elapsed_seconds` accumulated before the pause."""
    elapsed_seconds: int


TimerRecord = RunningRecord | PausedRecord


def parse_record(content: str, *, modified_at: int) -> TimerRecord:
    """Decode record file content; `modified_at` is the file mtime in seconds."""
    text = content.strip()
    if not text:
        return RunningRecord(started_at=modified_at)
    try:
        elapsed = int(text)
    except ValueError as error:
        raise MalformedRecordError(f"Unexpected record content: {text[:40]!r}") from error
    if elapsed < 0:
        raise MalformedRecordError(f"Negative elapsed seconds in record: {elapsed}")
    return PausedRecord(elapsed_seconds=elapsed)


class RecordStore:
    """Reads and rewrites the timer record file."""

    def __init__(self, path: str | Path, *, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("pomodoro")

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def read(self) -> Optional[TimerRecord]:
        try:
            modified_at = int(self._path.stat().st_mtime)
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as error:
            raise StorageUnavailableError(
                f"Cannot read timer record {self._path}: {error}"
            ) from error

        try:
            return parse_record(content, modified_at=modified_at)
        except MalformedRecordError as error:
            self._logger.warning(
                "Recovering malformed timer record %s from its timestamp: %s",
                self._path,
                error,
            )
            return RunningRecord(started_at=modified_at)

    def write_running(self, started_at: int) -> RunningRecord:
        try:
            self._ensure_parent()
            # Truncating drops any elapsed seconds saved by a pause.
            self._path.write_text("", encoding="utf-8")
            os.utime(self._path, (started_at, started_at))
        except OSError as error:
            raise StorageUnavailableError(
                f"Cannot write timer record {self._path}: {error}"
            ) from error
        return RunningRecord(started_at=started_at)

    def write_paused(self, elapsed_seconds: int) -> PausedRecord:
        try:
            self._ensure_parent()
            self._path.write_text(f"{elapsed_seconds}\n", encoding="utf-8")
        except OSError as error:
            raise StorageUnavailableError(
                f"Cannot write timer record {self._path}: {error}"
            ) from error
        return PausedRecord(elapsed_seconds=elapsed_seconds)

    def restamp(self, started_at: int) -> None:
        """Move the reference instant without touching the content."""
        try:
            os.utime(self._path, (started_at, started_at))
        except OSError as error:
            raise StorageUnavailableError(
                f"Cannot update timer record {self._path}: {error}"
            ) from error

    def delete(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as error:
            raise StorageUnavailableError(
                f"Cannot remove timer record {self._path}: {error}"
            ) from error

    def _ensure_parent(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
