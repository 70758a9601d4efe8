"""
Registry options.

Values resolve in order: explicit argument, environment variable, default.
"""
import os
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from config_interpolator import MissingStrategy

logger = logging.getLogger(__name__)

ENV_LOCK_SHARDS = "DYNAMIC_PROPERTY_LOCK_SHARDS"
ENV_LIST_DELIMITER = "DYNAMIC_PROPERTY_LIST_DELIMITER"
ENV_EAGER_REFRESH = "DYNAMIC_PROPERTY_EAGER_REFRESH"


class RegistryOptions(BaseModel):
    lock_shards: int = Field(default=16, ge=1, description="Number of locks guarding property recomputation")
    list_delimiter: str = Field(default=",", min_length=1, description="Separator for list and set values")
    eager_refresh: bool = Field(
        default=False,
        description="Refresh every handle after a change instead of only handles with listeners"
    )
    missing: MissingStrategy = Field(
        default=MissingStrategy.KEEP,
        description="Treatment of placeholders that reference unknown keys"
    )
    notification_thread_name: str = Field(default="property-notifier", description="Name prefix of the notification thread")


def _env(arg: Any, env_key: str, default: Any) -> Any:
    if arg is not None:
        return arg
    val = os.getenv(env_key)
    if val is not None:
        return val
    return default


def load_options(
    lock_shards: Optional[int] = None,
    list_delimiter: Optional[str] = None,
    eager_refresh: Optional[bool] = None,
    **kwargs: Any
) -> RegistryOptions:
    shards = _env(lock_shards, ENV_LOCK_SHARDS, 16)
    try:
        shards = int(shards)
    except (ValueError, TypeError):
        logger.warning(f"Invalid {ENV_LOCK_SHARDS}={shards!r}, using 16")
        shards = 16

    eager = _env(eager_refresh, ENV_EAGER_REFRESH, False)
    if isinstance(eager, str):
        eager = eager.lower() in ("true", "1", "yes", "on")

    return RegistryOptions(
        lock_shards=shards,
        list_delimiter=_env(list_delimiter, ENV_LIST_DELIMITER, ","),
        eager_refresh=bool(eager),
        **kwargs
    )
