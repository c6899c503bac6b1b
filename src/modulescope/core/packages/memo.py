from __future__ import annotations

"""
Compute-once value cell.

Publication goes through dict.setdefault, which is atomic under the
interpreter lock: concurrent first callers may run the factory more than
once, but all of them get the object stored by the first to publish.
"""

from typing import Callable, Dict, Generic, TypeVar

T = TypeVar("T")

_VALUE_KEY = "value"


class Memoized(Generic[T]):
    """Lazily evaluates a factory on first access and caches its result."""

    def __init__(self, factory: Callable[[], T]) -> None:
        if factory is None:
            raise ValueError("Factory must not be None!")
        self._factory = factory
        self._slot: Dict[str, T] = {}

    def get(self) -> T:
        try:
            return self._slot[_VALUE_KEY]
        except KeyError:
            pass
        return self._slot.setdefault(_VALUE_KEY, self._factory())

    def is_computed(self) -> bool:
        return _VALUE_KEY in self._slot

    def __repr__(self) -> str:
        state = repr(self._slot[_VALUE_KEY]) if self.is_computed() else "<pending>"
        return f"Memoized({state})"
