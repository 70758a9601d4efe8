"""
Scheduler settings.

Values resolve in order: explicit argument, environment variable, default.
"""
import os
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_INTERVAL = "CONFIG_POLL_INTERVAL_SECONDS"
ENV_SYNC_INIT = "CONFIG_POLL_SYNC_INIT"
ENV_RETRY_DELAY = "CONFIG_POLL_RETRY_DELAY_SECONDS"


class SchedulerSettings(BaseModel):
    interval: float = Field(default=30.0, gt=0, description="Seconds between polls")
    sync_init: bool = Field(default=True, description="Block execute() until the first poll succeeds")
    retry_delay: float = Field(default=1.0, ge=0, description="Seconds before retrying a failed initial poll")
    backoff_multiplier: float = Field(default=1.0, ge=1.0, description="Growth factor applied to retry_delay per failure")
    max_retry_delay: float = Field(default=60.0, ge=0, description="Upper bound for the retry delay")
    thread_name_prefix: str = Field(default="config-poller", description="Name prefix of polling threads")

    def retry_delay_for(self, failures: int) -> float:
        """Delay before the retry that follows `failures` consecutive failures."""
        delay = self.retry_delay * (self.backoff_multiplier ** max(failures - 1, 0))
        return min(delay, self.max_retry_delay)


def _env(arg: Any, env_key: str, default: Any) -> Any:
    if arg is not None:
        return arg
    val = os.getenv(env_key)
    if val is not None:
        return val
    return default


def _env_bool(arg: Any, env_key: str, default: bool) -> bool:
    val = _env(arg, env_key, default)
    if isinstance(val, str):
        return val.lower() in ("true", "1", "yes", "on")
    return bool(val)


def _env_float(arg: Any, env_key: str, default: float) -> float:
    val = _env(arg, env_key, default)
    try:
        return float(val)
    except (ValueError, TypeError):
        logger.warning(f"Invalid {env_key}={val!r}, using {default}")
        return default


def load_settings(
    interval: Optional[float] = None,
    sync_init: Optional[bool] = None,
    retry_delay: Optional[float] = None,
    **kwargs: Any
) -> SchedulerSettings:
    return SchedulerSettings(
        interval=_env_float(interval, ENV_INTERVAL, 30.0),
        sync_init=_env_bool(sync_init, ENV_SYNC_INIT, True),
        retry_delay=_env_float(retry_delay, ENV_RETRY_DELAY, 1.0),
        **kwargs
    )
