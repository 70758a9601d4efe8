"""
Cascade strategies: expand a base resource name into candidate names.

    strategy = ConcatCascadeStrategy(["${env}", "${region}"])
    strategy.generate("app", interpolator, {"env": "prod", "region": "eu"}.get)
    # => ["app", "app-prod", "app-prod-eu"]

Parameters are resolved on every call, so one strategy instance follows
changes to the values it references.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from config_interpolator import Interpolator, Lookup


class CascadeStrategy(ABC):
    @abstractmethod
    def generate(self, name: str, interpolator: Interpolator, lookup: Lookup) -> List[str]:
        """Ordered candidate names, least specific first."""
        pass


class NoCascadeStrategy(CascadeStrategy):
    def generate(self, name: str, interpolator: Interpolator, lookup: Lookup) -> List[str]:
        return [name]


class ConcatCascadeStrategy(CascadeStrategy):
    """
    Appends each resolved parameter to the previous candidate.

    A parameter resolving to "" still yields a candidate ending in the
    separator; the loader simply finds no resource under that name.
    """

    DEFAULT_SEPARATOR = "-"

    def __init__(self, parameters: Sequence[str], separator: str = DEFAULT_SEPARATOR):
        self.parameters = list(parameters)
        self.separator = separator

    def generate(self, name: str, interpolator: Interpolator, lookup: Lookup) -> List[str]:
        current = interpolator.resolve(name, lookup)
        result = [current]
        for parameter in self.parameters:
            current = current + self.separator + interpolator.resolve(parameter, lookup)
            result.append(current)
        return result

    def __repr__(self) -> str:
        return f"ConcatCascadeStrategy(parameters={self.parameters!r}, separator={self.separator!r})"
