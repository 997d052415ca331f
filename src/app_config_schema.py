"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "pomo.toml"
DEFAULT_RECORD_FILE = "pomo"
DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_NOTIFIER = "desktop"
DEFAULT_POLL_INTERVAL_SECONDS = 60

NOTIFIER_DESKTOP = "desktop"
NOTIFIER_CONSOLE = "console"
NOTIFIER_COMMAND = "command"
NOTIFIER_CHIME = "chime"

ALLOWED_NOTIFIERS: frozenset[str] = frozenset(
    {NOTIFIER_DESKTOP, NOTIFIER_CONSOLE, NOTIFIER_COMMAND, NOTIFIER_CHIME}
)


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Work/break durations and record location from `[timer]`."""
    record_file: str
    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60


@dataclass(frozen=True)
class NotifySettings:
    """Notification delivery settings from `[notify]`."""
    notifier: str = DEFAULT_NOTIFIER
    command: Optional[str] = None
    poll_interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `pomo.toml`."""
    timer: TimerSettings
    notify: NotifySettings
    source_file: Optional[str]
