"""
Polling strategies that drive config source refreshes.
"""
from .config import SchedulerSettings, load_settings
from .errors import SchedulerError, SchedulerShutdownError
from .fixed import FixedPollingStrategy, PollState
from .futures import immediate_failure, immediate_success
from .manual import ManualPollingStrategy
from .strategy import PollCallback, PollingStrategy

__all__ = [
    "SchedulerSettings",
    "load_settings",
    "SchedulerError",
    "SchedulerShutdownError",
    "FixedPollingStrategy",
    "PollState",
    "immediate_failure",
    "immediate_success",
    "ManualPollingStrategy",
    "PollCallback",
    "PollingStrategy",
]
