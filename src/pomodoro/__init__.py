from .constants import STOPPED_CLOCK
from .cycle import CyclePosition, PomodoroPhase, cycle_position, format_clock
from .errors import MalformedRecordError, PomodoroError, StorageUnavailableError
from .record import PausedRecord, RecordStore, RunningRecord, TimerRecord, parse_record
from .service import PomodoroTimer

__all__ = [
    "STOPPED_CLOCK",
    "CyclePosition",
    "MalformedRecordError",
    "PausedRecord",
    "PomodoroError",
    "PomodoroPhase",
    "PomodoroTimer",
    "RecordStore",
    "RunningRecord",
    "StorageUnavailableError",
    "TimerRecord",
    "cycle_position",
    "format_clock",
    "parse_record",
]
