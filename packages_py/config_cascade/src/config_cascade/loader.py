"""
Cascading resource loader.

Expands a resource name through a cascade strategy, loads every candidate
that exists and stacks them in a composite so the most specific candidate
has the highest priority:

    loader = ConfigLoader([YamlConfigReader(["conf"])], ConcatCascadeStrategy(["${env}"]))
    config = loader.load("app", lookup={"env": "prod"}.get)
    config.config_names()   # ["app-prod", "app"]
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Set

from config_interpolator import Interpolator, Lookup, MissingStrategy
from config_tree import CompositeConfig, Config, MapConfig

from .errors import ConfigLoadError, ResourceNotFoundError
from .readers import ConfigReader
from .strategies import CascadeStrategy, NoCascadeStrategy

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_KEY = "@next"


def _no_lookup(key: str) -> Optional[Any]:
    return None


class ConfigLoader:
    def __init__(
        self,
        readers: Sequence[ConfigReader],
        strategy: Optional[CascadeStrategy] = None,
        interpolator: Optional[Interpolator] = None,
        lookup: Optional[Lookup] = None,
        fail_on_first: bool = True,
        include_key: str = DEFAULT_INCLUDE_KEY
    ):
        if not readers:
            raise ValueError("ConfigLoader needs at least one reader")
        self.readers = list(readers)
        self.strategy = strategy or NoCascadeStrategy()
        # Unresolvable cascade parameters produce a name that is simply not found
        self.interpolator = interpolator or Interpolator(missing=MissingStrategy.KEEP)
        self.lookup = lookup or _no_lookup
        self.fail_on_first = fail_on_first
        self.include_key = include_key

    def load(
        self,
        resource_name: str,
        name: Optional[str] = None,
        strategy: Optional[CascadeStrategy] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        lookup: Optional[Lookup] = None
    ) -> CompositeConfig:
        """
        Load all cascade candidates of resource_name into one composite.

        Raises:
            ResourceNotFoundError: the strategy produced no candidates
            ConfigLoadError: fail_on_first is set and the first candidate
                could not be loaded, or an include chain loops
        """
        lookup = lookup or self.lookup
        strategy = strategy or self.strategy
        name = name or resource_name

        candidates = strategy.generate(resource_name, self.interpolator, lookup)
        if not candidates:
            raise ResourceNotFoundError(resource_name)

        # Lowest priority first; every entry is later pushed to the front
        layers: List[Config] = []
        for index, candidate in enumerate(candidates):
            loaded = self._load_candidate(candidate, lookup)
            if not loaded and index == 0 and self.fail_on_first:
                msg = f"Failed to load configuration resource '{resource_name}'"
                logger.error(msg)
                raise ConfigLoadError(msg, resource_name)
            layers.extend(loaded)

        composite = CompositeConfig(name)
        for layer in layers:
            composite.add_first(layer.name, layer)
        if overrides:
            composite.add_first(f"{name}-overrides", MapConfig(f"{name}-overrides", overrides))

        logger.info(f"Loaded '{name}' from {len(layers)} resource(s): {composite.config_names()}")
        return composite

    def _load_candidate(self, candidate: str, lookup: Lookup) -> List[Config]:
        """
        Load one candidate with every reader that has it.

        Returned lowest priority first: the first reader beats later
        readers, and a config beats the resources it includes.
        """
        found: List[Config] = []
        for reader in self.readers:
            if not reader.can_load(candidate):
                continue
            try:
                chain = self._load_chain(reader, candidate, lookup)
            except ResourceNotFoundError:
                logger.debug(f"{type(reader).__name__}: '{candidate}' not found")
                continue
            found = list(reversed(chain)) + found
        return found

    def _load_chain(self, reader: ConfigReader, resource: str, lookup: Lookup) -> List[Config]:
        chain: List[Config] = []
        visited: Set[str] = set()
        current: Optional[str] = resource
        while current:
            if current in visited:
                raise ConfigLoadError(f"Include cycle at '{current}' while loading '{resource}'", resource)
            visited.add(current)
            try:
                config = reader.load(current)
            except ResourceNotFoundError:
                if not chain:
                    raise
                logger.warning(f"Included resource '{current}' not found (from '{resource}')")
                break
            chain.append(config)
            include = config.get_raw_property(self.include_key)
            current = self.interpolator.resolve(str(include), lookup) if include else None
        return chain
