from __future__ import annotations

"""
Described Predicates.

Composable, self-describing predicates over class descriptors. The
description travels along with every combination so that filtered views
of a class universe can explain how they were obtained.
"""

from typing import Callable

from modulescope.core.universe.reflection import is_meta_annotated_with as _is_meta_annotated_with
from modulescope.domain.annotations import PackageInfo, is_annotation_kind, qualified_kind_name
from modulescope.domain.class_models import ClassDescriptor, Modifier
from modulescope.domain.constants import PACKAGE_INFO_NAME, PACKAGE_SEPARATOR


class DescribedPredicate:
    """
    A predicate over class descriptors carrying a human-readable description.

    Supports the '&', '|' and '~' operators as well as the equivalent
    and_(), or_() and negate() methods.
    """

    def __init__(self, description: str, test: Callable[[ClassDescriptor], bool]) -> None:
        if test is None:
            raise ValueError("Predicate function must not be None!")
        self._description = description
        self._test = test

    @property
    def description(self) -> str:
        return self._description

    def test(self, descriptor: ClassDescriptor) -> bool:
        return bool(self._test(descriptor))

    def __call__(self, descriptor: ClassDescriptor) -> bool:
        return self.test(descriptor)

    def and_(self, other: DescribedPredicate) -> DescribedPredicate:
        _require_predicate(other)
        return DescribedPredicate(
            f"{self.description} and {other.description}",
            lambda d: self.test(d) and other.test(d),
        )

    def or_(self, other: DescribedPredicate) -> DescribedPredicate:
        _require_predicate(other)
        return DescribedPredicate(
            f"{self.description} or {other.description}",
            lambda d: self.test(d) or other.test(d),
        )

    def negate(self) -> DescribedPredicate:
        return DescribedPredicate(f"not {self.description}", lambda d: not self.test(d))

    def as_(self, description: str) -> DescribedPredicate:
        """Return the same predicate under a new description."""
        return DescribedPredicate(description, self._test)

    __and__ = and_
    __or__ = or_
    __invert__ = negate

    def __repr__(self) -> str:
        return f"DescribedPredicate({self.description!r})"

# -----------------------------------------------------------------------------
# FACTORIES
# -----------------------------------------------------------------------------

def reside_in_a_package(name: str, include_sub_packages: bool = True) -> DescribedPredicate:
    """
    Match types residing in the given package.

    Args:
        name: Fully-qualified package name.
        include_sub_packages: Whether types of descendant packages match too.
    """
    if name is None:
        raise ValueError("Package name must not be None!")
    prefix = name + PACKAGE_SEPARATOR

    if include_sub_packages:
        return DescribedPredicate(
            f"reside in a package '{name}..'",
            lambda d: d.package_name == name or d.package_name.startswith(prefix),
        )
    return DescribedPredicate(f"reside in a package '{name}'", lambda d: d.package_name == name)


def has_simple_name(name: str) -> DescribedPredicate:
    return DescribedPredicate(f"have simple name '{name}'", lambda d: d.simple_name == name)


def is_meta_annotated_with(kind: type) -> DescribedPredicate:
    """Match types annotated with the kind directly or through meta-annotations."""
    if not is_annotation_kind(kind):
        raise ValueError(f"Annotation type must be an Annotation subclass, got {kind!r}!")
    return DescribedPredicate(
        f"meta-annotated with @{qualified_kind_name(kind)}",
        lambda d: _is_meta_annotated_with(d, kind),
    )


def has_modifier(modifier: Modifier) -> DescribedPredicate:
    return DescribedPredicate(f"have modifier {modifier.name}", lambda d: d.has_modifier(modifier))


def are_package_infos() -> DescribedPredicate:
    """Match types that describe the package they reside in."""
    return has_simple_name(PACKAGE_INFO_NAME).or_(is_meta_annotated_with(PackageInfo))


def do_not(predicate: DescribedPredicate) -> DescribedPredicate:
    _require_predicate(predicate)
    return predicate.negate().as_(f"do not {predicate.description}")


def _require_predicate(candidate: object) -> None:
    if not isinstance(candidate, DescribedPredicate):
        raise ValueError("Predicate must not be None!")
