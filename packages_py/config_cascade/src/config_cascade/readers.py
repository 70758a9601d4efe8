"""
Readers that turn a named resource on disk into a flat config node.
"""
import logging
import os
from typing import List, Optional, Protocol, Sequence, runtime_checkable

import yaml
from deepmerge import Merger
from dotenv import dotenv_values

from config_tree import Config, MapConfig, flatten_mapping

from .errors import ConfigLoadError, ResourceNotFoundError

logger = logging.getLogger(__name__)

_KNOWN_EXTENSIONS = (".yaml", ".yml", ".env", ".json", ".properties")

# Later documents override earlier ones; lists are replaced, not concatenated
yaml_merger = Merger(
    [(dict, ["merge"]), (list, ["override"]), (set, ["override"])],
    ["override"],
    ["override"]
)


@runtime_checkable
class ConfigReader(Protocol):
    def can_load(self, name: str) -> bool:
        ...

    def load(self, name: str) -> Config:
        """Load name; raises ResourceNotFoundError when it does not exist."""
        ...


class _FileReader:
    def __init__(self, search_paths: Optional[Sequence[str]] = None, extensions: Sequence[str] = ()):
        self.search_paths = list(search_paths or ["."])
        self.extensions = tuple(extensions)

    def can_load(self, name: str) -> bool:
        _, ext = os.path.splitext(name)
        return not ext or ext in self.extensions or ext not in _KNOWN_EXTENSIONS

    def _candidate_paths(self, name: str) -> List[str]:
        _, ext = os.path.splitext(name)
        filenames = [name] if ext in self.extensions else [name + e for e in self.extensions]
        if os.path.isabs(name):
            return filenames
        return [os.path.join(directory, f) for directory in self.search_paths for f in filenames]

    def _find(self, name: str) -> str:
        paths = self._candidate_paths(name)
        for path in paths:
            if os.path.isfile(path):
                return path
        raise ResourceNotFoundError(name, paths)


class YamlConfigReader(_FileReader):
    """Loads <dir>/<name>.yaml (or .yml). Multi-document files are deep-merged."""

    def __init__(self, search_paths: Optional[Sequence[str]] = None, extensions: Sequence[str] = (".yaml", ".yml")):
        super().__init__(search_paths, extensions)

    def load(self, name: str) -> Config:
        path = self._find(name)
        try:
            with open(path, "r") as f:
                documents = list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:
            msg = f"YAML parsing error in {path}: {e}"
            logger.error(msg)
            raise ConfigLoadError(msg, name) from e

        merged = {}
        for document in documents:
            if document is None:
                continue
            if not isinstance(document, dict):
                raise ConfigLoadError(f"Top level of {path} must be a mapping", name)
            merged = yaml_merger.merge(merged, document)

        properties = flatten_mapping(merged)
        logger.debug(f"Loaded {len(properties)} properties from {path}")
        return MapConfig(name, properties)


class DotenvConfigReader(_FileReader):
    """Loads <dir>/<name>.env key=value files."""

    def __init__(self, search_paths: Optional[Sequence[str]] = None, extension: str = ".env"):
        super().__init__(search_paths, (extension,))

    def load(self, name: str) -> Config:
        path = self._find(name)
        values = {k: v for k, v in dotenv_values(path).items() if v is not None}
        logger.debug(f"Loaded {len(values)} properties from {path}")
        return MapConfig(name, values)
