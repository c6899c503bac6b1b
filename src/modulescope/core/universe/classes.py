from __future__ import annotations

"""
Class Universe.

An immutable, value-equal collection of class descriptors. Filtering
returns new collections; the source collection is never modified, so every view
derived from a Classes instance stays valid for the instance's lifetime.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Union

from modulescope.core.universe.formatting import format_relative_name
from modulescope.core.universe.predicates import DescribedPredicate
from modulescope.domain.class_models import ClassDescriptor


class Classes:
    """
    Queryable set of class descriptors.

    Membership is by fully-qualified name: adding two different descriptors
    with the same name is rejected.
    """

    def __init__(self, classes: Iterable[ClassDescriptor] = (), description: str = "classes") -> None:
        entries: Dict[str, ClassDescriptor] = {}
        for descriptor in classes:
            if not isinstance(descriptor, ClassDescriptor):
                raise ValueError(f"Expected a ClassDescriptor, got {descriptor!r}!")
            existing = entries.get(descriptor.name)
            if existing is not None and existing != descriptor:
                raise ValueError(f"Conflicting descriptors for type {descriptor.name}!")
            entries[descriptor.name] = descriptor

        self._entries = entries
        self._description = description
        self._hash: Optional[int] = None

    @classmethod
    def of(cls, *descriptors: ClassDescriptor) -> Classes:
        return cls(descriptors)

    @property
    def description(self) -> str:
        return self._description

    def that(self, predicate: DescribedPredicate) -> Classes:
        """Return the subset of types matching the predicate."""
        if predicate is None:
            raise ValueError("Predicate must not be None!")
        return Classes(
            (d for d in self._entries.values() if predicate.test(d)),
            description=f"{self._description} that {predicate.description}",
        )

    def contains(self, item: Union[ClassDescriptor, str]) -> bool:
        """Return whether the given type, or the type with the given name, is contained."""
        if isinstance(item, ClassDescriptor):
            return self._entries.get(item.name) == item
        if isinstance(item, str):
            return item in self._entries
        return False

    def stream(self) -> Iterator[ClassDescriptor]:
        return iter(self._entries.values())

    def names(self) -> List[str]:
        return sorted(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def format(self, base_package: str = "") -> str:
        """Render one line per type, names shortened relative to the base package."""
        return "\n".join(f"  - {format_relative_name(n, base_package)}" for n in self.names())

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return self.stream()

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Classes):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._entries.values()))
        return self._hash

    def __repr__(self) -> str:
        return f"Classes({self._description!r}, size={len(self._entries)})"
