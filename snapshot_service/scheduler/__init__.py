"""Refresh scheduling for registered snapshot sources."""

from .jobs import ErrorReporter, log_refresh_error, refresh_source_job
from .scheduler import TICK_JOB_ID, RefreshScheduler, get_time_seconds

__all__ = [
    "ErrorReporter",
    "log_refresh_error",
    "refresh_source_job",
    "TICK_JOB_ID",
    "RefreshScheduler",
    "get_time_seconds",
]
