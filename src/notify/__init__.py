"""Public exports for phase-boundary notifications."""

from .loop import (
    STATE_WAITING_FOR_BOUNDARY,
    STATE_WAITING_FOR_SESSION,
    NotifyLoop,
)
from .messages import MESSAGE_END_OF_BREAK, MESSAGE_END_OF_WORK, boundary_message
from .notifiers import (
    CommandNotifier,
    ConsoleNotifier,
    DesktopNotifier,
    NotificationError,
    create_notifier,
)

__all__ = [
    "MESSAGE_END_OF_BREAK",
    "MESSAGE_END_OF_WORK",
    "STATE_WAITING_FOR_BOUNDARY",
    "STATE_WAITING_FOR_SESSION",
    "CommandNotifier",
    "ConsoleNotifier",
    "DesktopNotifier",
    "NotificationError",
    "NotifyLoop",
    "boundary_message",
    "create_notifier",
]
