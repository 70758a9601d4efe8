"""
Layered application configuration.

Layers, highest priority first:

    runtime       values set in code at runtime
    remote        source-fed configs (polling, watched)
    application   the application's own resources
    library       resources shipped by libraries
    environment   process environment variables
    defaults      values registered in code as fallbacks
"""
import logging
from typing import Any, Mapping, Optional

from config_tree import CompositeConfig, Config, EnvironmentConfig, SettableConfig

from .loader import ConfigLoader
from .readers import YamlConfigReader
from .strategies import CascadeStrategy

logger = logging.getLogger(__name__)

RUNTIME_LAYER = "runtime"
REMOTE_LAYER = "remote"
APPLICATION_LAYER = "application"
LIBRARY_LAYER = "library"
ENVIRONMENT_LAYER = "environment"
DEFAULTS_LAYER = "defaults"


class AppConfig(CompositeConfig):
    def __init__(
        self,
        loader: Optional[ConfigLoader] = None,
        environ: Optional[Mapping[str, str]] = None,
        name: str = "app"
    ):
        super().__init__(name, unique_names=True)
        self.loader = loader or ConfigLoader([YamlConfigReader()])

        self.runtime = SettableConfig(RUNTIME_LAYER)
        self.remote = CompositeConfig(REMOTE_LAYER, unique_names=True)
        self.application = CompositeConfig(APPLICATION_LAYER, unique_names=True)
        self.library = CompositeConfig(LIBRARY_LAYER, unique_names=True)
        self.environment = EnvironmentConfig(ENVIRONMENT_LAYER, environ)
        self.defaults = SettableConfig(DEFAULTS_LAYER)

        for layer in (self.runtime, self.remote, self.application, self.library, self.environment, self.defaults):
            self.add_last(layer.name, layer)

    def lookup(self, key: str) -> Optional[Any]:
        return self.get_raw_property(key)

    # ========== Runtime / Defaults ==========

    def set_property(self, key: str, value: Any) -> None:
        self.runtime.set_property(key, value)

    def clear_property(self, key: str) -> None:
        self.runtime.clear_property(key)

    def set_default(self, key: str, value: Any) -> None:
        self.defaults.set_property(key, value)

    # ========== Layers ==========

    def add_remote_config(self, name: str, config: Config) -> None:
        self.remote.add_last(name, config)

    def add_application_config(self, name: str, config: Config) -> None:
        self.application.add_last(name, config)

    def add_library_config(self, name: str, config: Config) -> None:
        self.library.add_last(name, config)

    def load_application(
        self,
        resource_name: str,
        strategy: Optional[CascadeStrategy] = None,
        overrides: Optional[Mapping[str, Any]] = None
    ) -> Config:
        """Load resource_name through the loader into the application layer."""
        config = self.loader.load(resource_name, strategy=strategy, overrides=overrides, lookup=self.lookup)
        self.add_application_config(resource_name, config)
        logger.info(f"Application config '{resource_name}' loaded: {config.config_names()}")
        return config

    def load_library(
        self,
        resource_name: str,
        strategy: Optional[CascadeStrategy] = None,
        overrides: Optional[Mapping[str, Any]] = None
    ) -> Config:
        config = self.loader.load(resource_name, strategy=strategy, overrides=overrides, lookup=self.lookup)
        self.add_library_config(resource_name, config)
        logger.info(f"Library config '{resource_name}' loaded: {config.config_names()}")
        return config
