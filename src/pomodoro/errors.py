class PomodoroError(Exception):
    """Base exception for timer record handling."""


class StorageUnavailableError(PomodoroError):
    """Raised when the timer record location cannot be created, read, or written."""


class MalformedRecordError(PomodoroError):
    """Raised when timer record content is neither empty nor an elapsed-seconds integer."""
