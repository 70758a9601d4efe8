from typing import Optional


class SchedulerError(Exception):
    """Base exception for polling scheduler errors."""
    pass


class SchedulerShutdownError(SchedulerError):
    """The scheduler was shut down before a poll could succeed."""

    def __init__(self, message: str = "Polling scheduler was shut down", cause: Optional[Exception] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
