"""Exceptions raised while substituting placeholders."""
from typing import List


class InterpolationError(Exception):
    """Base exception for placeholder substitution failures."""
    pass


class CircularReferenceError(InterpolationError):
    def __init__(self, cycle: List[str]):
        msg = f"Circular reference detected: {' -> '.join(cycle)}"
        super().__init__(msg)
        self.cycle = cycle


class MissingPropertyError(InterpolationError):
    def __init__(self, key: str, template: str = ""):
        msg = f"Unable to resolve placeholder '{key}'"
        if template:
            msg += f" in '{template}'"
        super().__init__(msg)
        self.key = key
        self.template = template
