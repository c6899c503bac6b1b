from __future__ import annotations

"""
Package Abstraction.

A Package is a view on a class universe scoped to one namespace: the types
residing in it (and, unless reduced with to_single(), in its descendants),
its direct sub-packages derived from those types, and the annotation
metadata attached to the namespace.
"""

from typing import FrozenSet, Iterable, Iterator, List, Optional, Set, Type, TypeVar, Union

from modulescope.core.packages.memo import Memoized
from modulescope.core.packages.resolver import (
    AnnotationLookup,
    LookupStatus,
    lookup_annotation,
    lookup_namespace_annotation,
)
from modulescope.core.packages.segmenter import extract_direct_sub_package
from modulescope.core.universe.classes import Classes
from modulescope.core.universe.predicates import (
    DescribedPredicate,
    are_package_infos,
    do_not,
    has_modifier,
    has_simple_name,
    is_meta_annotated_with,
    reside_in_a_package,
)
from modulescope.domain.annotations import Annotation, is_annotation_kind
from modulescope.domain.class_models import ClassDescriptor, Modifier
from modulescope.domain.constants import PACKAGE_INFO_NAME, PACKAGE_SEPARATOR

A = TypeVar("A", bound=Annotation)


def is_package_info_type(descriptor: ClassDescriptor) -> bool:
    """Return whether the type describes the package it resides in."""
    if descriptor is None:
        raise ValueError("Type must not be None!")
    return are_package_infos().test(descriptor)


class Package:
    """
    Hierarchical view on the types of a single package.

    Instances are immutable value objects. Two packages are equal when they
    are views on equal universes with the same name, the same scoped types
    and the same direct sub-packages.
    """

    def __init__(self, classes: Classes, name: str, include_sub_packages: bool = True) -> None:
        """
        Create a package view. Prefer Package.of() and to_single().

        Args:
            classes: The class universe; must not be None.
            name: Fully-qualified package name; must not be None or empty.
            include_sub_packages: Whether types of descendant packages belong
                                  to the view.
        """
        if classes is None:
            raise ValueError("Classes must not be None!")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Name must not be None or empty!")

        self._universe = classes
        self._name = name
        self._include_sub_packages = include_sub_packages
        self._classes = classes.that(reside_in_a_package(name, include_sub_packages))
        self._direct_sub_packages: Memoized[FrozenSet[Package]] = Memoized(self._compute_direct_sub_packages)

    @classmethod
    def of(cls, classes: Classes, name: str) -> Package:
        """Create a package view including all sub-packages."""
        return cls(classes, name, True)

    # -------------------------------------------------------------------------
    # Naming and scope
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def local_name(self) -> str:
        """The last segment of the qualified package name."""
        return self._name.rpartition(PACKAGE_SEPARATOR)[2]

    @property
    def universe(self) -> Classes:
        return self._universe

    @property
    def include_sub_packages(self) -> bool:
        return self._include_sub_packages

    @property
    def classes(self) -> Classes:
        """Types residing in the package, and in sub-packages unless reduced."""
        return self._classes

    @property
    def description(self) -> str:
        return self._universe.description

    def to_single(self) -> Package:
        """Reduce the view to the types residing directly in the package."""
        return Package(self._universe, self._name, False)

    # -------------------------------------------------------------------------
    # Hierarchy and contents
    # -------------------------------------------------------------------------

    def get_direct_sub_packages(self) -> FrozenSet[Package]:
        """
        Return the packages exactly one segment below this one.

        Only packages containing at least one type (directly or in their own
        descendants) are reported. Computed on first access; later calls
        return the identical set.
        """
        return self._direct_sub_packages.get()

    def get_exposed_classes(self) -> Classes:
        """Return the public types of the view, excluding the package marker type."""
        return (
            self._classes
            .that(do_not(has_simple_name(PACKAGE_INFO_NAME)))
            .that(has_modifier(Modifier.PUBLIC))
        )

    def get_sub_packages_annotated_with(self, kind: type) -> Iterator[Package]:
        """
        Yield the packages whose description carrier is annotated with the kind.

        Args:
            kind: Annotation kind; must not be None.
        """
        _require_kind(kind)
        carriers = self._classes.that(are_package_infos().and_(is_meta_annotated_with(kind)))
        return self._iter_packages(d.package_name for d in carriers)

    def that(self, predicate: DescribedPredicate) -> Classes:
        """Return all types of the view matching the predicate."""
        if predicate is None:
            raise ValueError("Predicate must not be None!")
        return self._classes.that(predicate)

    def contains(self, type_or_name: Union[ClassDescriptor, str]) -> bool:
        """Return whether the view contains the given type or the type with the given name."""
        if type_or_name is None:
            raise ValueError("Type must not be None!")
        if isinstance(type_or_name, str) and not type_or_name.strip():
            raise ValueError("Type name must not be None or empty!")
        return self._classes.contains(type_or_name)

    def stream(self) -> Iterator[ClassDescriptor]:
        return self._classes.stream()

    # -------------------------------------------------------------------------
    # Annotations
    # -------------------------------------------------------------------------

    def get_annotation(self, kind: Type[A]) -> Optional[A]:
        """
        Return the annotation of the kind declared on the package marker type.

        Raises:
            AmbiguousAnnotationError: If several marker types carry the kind.
        """
        return lookup_namespace_annotation(self._single_level_classes(), self._name, kind).get()

    def find_annotation(self, kind: Type[A]) -> Optional[A]:
        """
        Return the annotation of the kind declared on the package marker type or
        on one of the description carriers residing directly in the package.

        Raises:
            AmbiguousAnnotationError: If several types in the package carry the kind.
        """
        return self.lookup_annotation(kind).get()

    def lookup_annotation(self, kind: type) -> AnnotationLookup:
        """Run the same search as find_annotation() and report ambiguity as a result."""
        return lookup_annotation(self._single_level_classes(), self._name, kind)

    def has_annotation(self, kind: type) -> bool:
        return self.lookup_annotation(kind).status is not LookupStatus.ABSENT

    # -------------------------------------------------------------------------
    # Object protocol
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return self.stream()

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (ClassDescriptor, str)) and item:
            return self.contains(item)
        return False

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Package):
            return NotImplemented
        return (
            self._name == other._name
            and self._universe == other._universe
            and self._classes == other._classes
            and self._sub_package_names() == other._sub_package_names()
        )

    def __hash__(self) -> int:
        return hash((self._name, self._universe))

    def __str__(self) -> str:
        return f"{self._name}\n{self._classes.format(self._name)}\n"

    def __repr__(self) -> str:
        return f"Package({self._name!r}, include_sub_packages={self._include_sub_packages})"

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _single_level_classes(self) -> Classes:
        if not self._include_sub_packages:
            return self._classes
        return self.to_single().classes

    def _compute_direct_sub_packages(self) -> FrozenSet[Package]:
        names = (
            extract_direct_sub_package(self._name, d.package_name)
            for d in self._classes
            if d.package_name != self._name
        )
        return frozenset(self._iter_packages(names))

    def _iter_packages(self, names: Iterable[str]) -> Iterator[Package]:
        seen: Set[str] = set()
        for name in names:
            if name not in seen:
                seen.add(name)
                yield Package.of(self._universe, name)

    def _sub_package_names(self) -> List[str]:
        return sorted(p.name for p in self.get_direct_sub_packages())


def _require_kind(kind: object) -> None:
    if not is_annotation_kind(kind):
        raise ValueError(f"Annotation type must be an Annotation subclass, got {kind!r}!")
