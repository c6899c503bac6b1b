from __future__ import annotations

"""
Class Descriptor Data Models.

Immutable descriptions of the types making up a class universe. The core
never inspects source or bytecode; it only reads these records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Type, TypeVar

from modulescope.domain.annotations import Annotation
from modulescope.domain.constants import PACKAGE_SEPARATOR

A = TypeVar("A", bound=Annotation)


class Modifier(Enum):
    """Visibility and declaration modifiers of a type."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    FINAL = "final"
    STATIC = "static"


@dataclass(frozen=True)
class ClassDescriptor:
    """
    Represents a single type of the analyzed codebase.

    Attributes:
        name: Fully-qualified name, e.g. 'com.acme.orders.Order'.
        modifiers: Modifiers declared on the type.
        annotations: Annotation values directly present on the type.
    """
    name: str
    modifiers: FrozenSet[Modifier] = field(default_factory=lambda: frozenset({Modifier.PUBLIC}))
    annotations: Tuple[Annotation, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Class name must not be None or empty!")
        # Normalize collection inputs so descriptors stay hashable
        object.__setattr__(self, "modifiers", frozenset(self.modifiers))
        object.__setattr__(self, "annotations", tuple(self.annotations))

    @property
    def package_name(self) -> str:
        """Name of the package the type resides in ('' for the root package)."""
        head, sep, _ = self.name.rpartition(PACKAGE_SEPARATOR)
        return head if sep else ""

    @property
    def simple_name(self) -> str:
        return self.name.rpartition(PACKAGE_SEPARATOR)[2]

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def get_annotation_of_type(self, kind: Type[A]) -> Optional[A]:
        """Return the annotation of the given kind directly present on the type, if any."""
        for annotation in self.annotations:
            if type(annotation) is kind:
                return annotation  # type: ignore[return-value]
        return None

    def __str__(self) -> str:
        return self.name
