"""Notification delivery backends: console, desktop popups, and user commands."""

from __future__ import annotations

import logging
import platform
import shlex
import shutil
import subprocess
import sys
from typing import Optional, TextIO

from app_config_schema import (
    NOTIFIER_CHIME,
    NOTIFIER_COMMAND,
    NOTIFIER_CONSOLE,
    NOTIFIER_DESKTOP,
)

from .contracts import Notifier
from .messages import MESSAGE_BLOCK_TYPES

APP_NAME = "Pomodoro"


class NotificationError(Exception):
    """Raised when a notification cannot be delivered."""


class ConsoleNotifier:
    """Writes messages to stdout."""
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def notify(self, message: str) -> None:
        print(message, file=self._stream or sys.stdout, flush=True)


class DesktopNotifier:
    """Shows a desktop notification via osascript (macOS) or notify-send.

    Falls back to `fallback` (the console by default) when neither tool is
    available.
    """
    def __init__(
        self,
        *,
        app_name: str = APP_NAME,
        fallback: Optional[Notifier] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._app_name = app_name
        self._fallback = fallback or ConsoleNotifier()
        self._logger = logger or logging.getLogger("notify")

    def notify(self, message: str) -> None:
        command = self._command(message)
        if command is None:
            self._logger.debug("No desktop notification tool found; using fallback")
            self._fallback.notify(message)
            return

        try:
            subprocess.run(
                command,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as error:
            raise NotificationError(f"Desktop notification failed: {error}") from error

    def _command(self, message: str) -> Optional[list[str]]:
        if platform.system() == "Darwin":
            script = (
                f"display notification {_applescript_quote(message)} "
                f"with title {_applescript_quote(self._app_name)}"
            )
            return ["osascript", "-e", script]
        if shutil.which("notify-send"):
            return ["notify-send", "-a", self._app_name, message]
        return None


class CommandNotifier:
    """Runs a user command with the block type code and message appended.

    The block type is 0 at the end of a work period and 1 at the end of a
    break period.
    """
    def __init__(self, command: str, *, logger: Optional[logging.Logger] = None):
        argv = shlex.split(command)
        if not argv:
            raise ValueError("command cannot be empty")
        self._argv = argv
        self._logger = logger or logging.getLogger("notify")

    def notify(self, message: str) -> None:
        block_type = MESSAGE_BLOCK_TYPES.get(message)
        if block_type is None:
            raise NotificationError(f"Unknown block type for message: {message!r}")

        argv = [*self._argv, str(block_type), message]
        self._logger.debug("Running notification command: %s", argv)
        try:
            subprocess.run(argv, check=True)
        except (OSError, subprocess.CalledProcessError) as error:
            raise NotificationError(f"Notification command failed: {error}") from error


def create_notifier(settings, *, logger: Optional[logging.Logger] = None) -> Notifier:
    """Build the notifier selected by `NotifySettings`."""
    logger = logger or logging.getLogger("notify")
    name = settings.notifier
    if name == NOTIFIER_CONSOLE:
        return ConsoleNotifier()
    if name == NOTIFIER_DESKTOP:
        return DesktopNotifier(logger=logger)
    if name == NOTIFIER_COMMAND:
        if not settings.command:
            raise ValueError("notify.command is required for the command notifier")
        return CommandNotifier(settings.command, logger=logger)
    if name == NOTIFIER_CHIME:
        # sounddevice and numpy are only needed for the chime.
        from .chime import ChimeNotifier

        return ChimeNotifier(inner=DesktopNotifier(logger=logger), logger=logger)
    raise ValueError(f"Unsupported notifier: {name!r}")


def _applescript_quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
