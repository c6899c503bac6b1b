from __future__ import annotations

"""
Package Annotation Resolver.

Locates the single annotation value of a given kind governing a package.
The search is ordered:

1. Namespace level: the marker type standing in for the package itself
   ('__init__') when it is (meta-)annotated with the kind.
2. Member carriers: types residing directly in the package that are
   meta-annotated with PackageInfo and with the kind. Sub-packages are
   never searched.

Each tier yields exactly one value, nothing, or an ambiguity listing all
candidate values. The first tier producing something other than "nothing"
decides the outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from modulescope.core.universe.classes import Classes
from modulescope.core.universe.formatting import abbreviate_type_name
from modulescope.core.universe.predicates import has_simple_name, is_meta_annotated_with
from modulescope.core.universe.reflection import get_merged_annotation
from modulescope.domain.annotations import PackageInfo, is_annotation_kind
from modulescope.domain.constants import PACKAGE_INFO_NAME
from modulescope.domain.errors import AmbiguousAnnotationError

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

class LookupStatus(Enum):
    FOUND = "found"
    ABSENT = "absent"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class AnnotationLookup:
    """
    Outcome of an annotation search on a package.

    Attributes:
        status: Whether a single value, nothing, or several values were found.
        package_name: The package searched.
        annotation_kind: Abbreviated display name of the requested kind.
        value: The resolved value when status is FOUND.
        candidates: All conflicting values when status is AMBIGUOUS.
    """
    status: LookupStatus
    package_name: str
    annotation_kind: str
    value: Optional[Any] = None
    candidates: Tuple[Any, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def ambiguous(self) -> bool:
        return self.status is LookupStatus.AMBIGUOUS

    def get(self) -> Optional[Any]:
        """
        Return the resolved value, or None when absent.

        Raises:
            AmbiguousAnnotationError: If several candidates were found.
        """
        if self.ambiguous:
            raise AmbiguousAnnotationError(self.package_name, self.annotation_kind, self.candidates)
        return self.value

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def lookup_namespace_annotation(package_classes: Classes, package_name: str, kind: type) -> AnnotationLookup:
    """
    Search the package marker type for the annotation kind.

    Args:
        package_classes: Types residing directly in the package.
        package_name: Name of the package.
        kind: Requested annotation kind.
    """
    _require_kind(kind)
    markers = package_classes.that(has_simple_name(PACKAGE_INFO_NAME).and_(is_meta_annotated_with(kind)))
    return _to_lookup(markers, package_name, kind)


def lookup_carrier_annotation(package_classes: Classes, package_name: str, kind: type) -> AnnotationLookup:
    """
    Search the PackageInfo carriers of the package for the annotation kind.

    Args:
        package_classes: Types residing directly in the package.
        package_name: Name of the package.
        kind: Requested annotation kind.
    """
    _require_kind(kind)
    carriers = package_classes.that(is_meta_annotated_with(PackageInfo).and_(is_meta_annotated_with(kind)))
    return _to_lookup(carriers, package_name, kind)


def lookup_annotation(package_classes: Classes, package_name: str, kind: type) -> AnnotationLookup:
    """Run the namespace-level search, falling back to member carriers."""
    namespace_level = lookup_namespace_annotation(package_classes, package_name, kind)
    if namespace_level.status is not LookupStatus.ABSENT:
        return namespace_level
    return lookup_carrier_annotation(package_classes, package_name, kind)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _to_lookup(matches: Classes, package_name: str, kind: type) -> AnnotationLookup:
    display_name = abbreviate_type_name(kind)
    # Sorted by type name so ambiguity reports are stable across runs
    values: Sequence[Any] = [
        get_merged_annotation(d, kind) for d in sorted(matches, key=lambda d: d.name)
    ]

    if not values:
        return AnnotationLookup(LookupStatus.ABSENT, package_name, display_name)
    if len(values) == 1:
        return AnnotationLookup(LookupStatus.FOUND, package_name, display_name, value=values[0])
    return AnnotationLookup(
        LookupStatus.AMBIGUOUS, package_name, display_name, candidates=tuple(values)
    )


def _require_kind(kind: object) -> None:
    if not is_annotation_kind(kind):
        raise ValueError(f"Annotation type must be an Annotation subclass, got {kind!r}!")
