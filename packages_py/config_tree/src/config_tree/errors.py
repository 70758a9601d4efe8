"""Exceptions raised by configuration nodes."""


class ConfigError(Exception):
    """Base exception for configuration tree errors."""
    pass


class NotFoundError(ConfigError, KeyError):
    def __init__(self, key: str, config_name: str = ""):
        msg = f"'{key}' not found"
        if config_name:
            msg += f" in config '{config_name}'"
        super().__init__(msg)
        self.key = key
        self.config_name = config_name

    def __str__(self) -> str:
        return self.args[0]


class ConfigAlreadyExistsError(ConfigError):
    def __init__(self, name: str, parent_name: str = ""):
        msg = f"Configuration with name '{name}' already exists"
        if parent_name:
            msg += f" in '{parent_name}'"
        super().__init__(msg)
        self.name = name
        self.parent_name = parent_name


class PollingError(ConfigError):
    def __init__(self, config_name: str, cause: Exception):
        msg = f"Failed to poll configuration for '{config_name}': {cause}"
        super().__init__(msg)
        self.config_name = config_name
        self.cause = cause
