"""Data models shared by config nodes and config sources."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional


@dataclass(frozen=True)
class ResolutionResult:
    """Where a key was found: the raw value, the owning child and its depth."""
    key: str
    value: Any
    source: str
    depth: int
    path: str


@dataclass(frozen=True)
class PollingResponse:
    """
    Result of one poll of a config source.

    A snapshot replaces the node contents; a delta adds `to_add` and drops
    `to_remove`. `checkpoint` is handed back to the source on the next poll.
    """
    to_add: Mapping[str, Any] = field(default_factory=dict)
    to_remove: FrozenSet[str] = frozenset()
    has_data: bool = True
    is_delta: bool = False
    checkpoint: Optional[Any] = None

    @classmethod
    def for_snapshot(cls, values: Mapping[str, Any], checkpoint: Optional[Any] = None) -> 'PollingResponse':
        return cls(to_add=dict(values), checkpoint=checkpoint)

    @classmethod
    def for_delta(
        cls,
        to_add: Optional[Mapping[str, Any]] = None,
        to_remove: Optional[Any] = None,
        checkpoint: Optional[Any] = None
    ) -> 'PollingResponse':
        return cls(
            to_add=dict(to_add or {}),
            to_remove=frozenset(to_remove or ()),
            is_delta=True,
            checkpoint=checkpoint
        )

    @classmethod
    def noop(cls, checkpoint: Optional[Any] = None) -> 'PollingResponse':
        return cls(has_data=False, checkpoint=checkpoint)

    def apply_to(self, current: Mapping[str, Any]) -> Dict[str, Any]:
        """New property dict after applying this response to current."""
        if not self.is_delta:
            return dict(self.to_add)
        result = dict(current)
        result.update(self.to_add)
        for key in self.to_remove:
            result.pop(key, None)
        return result
