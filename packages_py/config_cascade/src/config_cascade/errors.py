from typing import List, Optional

from config_tree import ConfigError


class ConfigLoadError(ConfigError):
    """A configuration resource could not be loaded."""

    def __init__(self, message: str, resource_name: str = ""):
        super().__init__(message)
        self.resource_name = resource_name


class ResourceNotFoundError(ConfigLoadError):
    def __init__(self, resource_name: str, searched: Optional[List[str]] = None):
        self.searched = list(searched or [])
        msg = f"Configuration resource '{resource_name}' not found"
        if self.searched:
            msg += f" (searched: {', '.join(self.searched)})"
        super().__init__(msg, resource_name)
