"""Notification texts sent when a work or break period ends."""

from __future__ import annotations

from pomodoro.constants import PHASE_BREAK, PHASE_WORK

MESSAGE_END_OF_WORK = "End of a work period. Time for a break!"
MESSAGE_END_OF_BREAK = "End of a break period. Time for work!"

# Block type codes passed to external callback commands.
BLOCK_TYPE_WORK = 0
BLOCK_TYPE_BREAK = 1

_PHASE_MESSAGES = {
    PHASE_WORK: MESSAGE_END_OF_WORK,
    PHASE_BREAK: MESSAGE_END_OF_BREAK,
}

MESSAGE_BLOCK_TYPES = {
    MESSAGE_END_OF_WORK: BLOCK_TYPE_WORK,
    MESSAGE_END_OF_BREAK: BLOCK_TYPE_BREAK,
}


def boundary_message(ended_phase: str) -> str:
    """Return the notification text for the phase that just ended."""
    try:
        return _PHASE_MESSAGES[ended_phase]
    except KeyError as error:
        raise ValueError(f"Unknown pomodoro phase: {ended_phase!r}") from error
