"""
Cascading resource loading and the layered application config.
"""
from .app_config import AppConfig
from .errors import ConfigLoadError, ResourceNotFoundError
from .loader import ConfigLoader
from .readers import ConfigReader, DotenvConfigReader, YamlConfigReader
from .strategies import CascadeStrategy, ConcatCascadeStrategy, NoCascadeStrategy

__all__ = [
    "AppConfig",
    "ConfigLoadError",
    "ResourceNotFoundError",
    "ConfigLoader",
    "ConfigReader",
    "DotenvConfigReader",
    "YamlConfigReader",
    "CascadeStrategy",
    "ConcatCascadeStrategy",
    "NoCascadeStrategy",
]
