"""Phase, prefix, and display constants used by pomodoro state logic."""

from __future__ import annotations

PHASE_WORK = "work"
PHASE_BREAK = "break"

PREFIX_WORK = "W"
PREFIX_BREAK = "B"
PREFIX_PAUSED = "P"

PHASE_PREFIXES: dict[str, str] = {
    PHASE_WORK: PREFIX_WORK,
    PHASE_BREAK: PREFIX_BREAK,
}

STOPPED_CLOCK = "  --:--"
CLOCK_FORMAT = "%2s%02d:%02d"
