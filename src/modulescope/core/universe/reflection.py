from __future__ import annotations

"""
Annotation Reflection.

Resolves the effective value of an annotation kind on a class descriptor,
following meta-annotation chains. Annotations present directly on the type
win over meta-annotations; shallower meta-annotations win over deeper ones.
Aliases declared with meta_annotated are applied while walking a chain, so
the returned value is the merged view of the whole chain.
"""

import dataclasses
from collections import deque
from typing import Deque, List, Optional, Set, Type, TypeVar

from modulescope.domain.annotations import (
    Annotation,
    aliases_of,
    is_annotation_kind,
    meta_annotations_of,
)
from modulescope.domain.class_models import ClassDescriptor

A = TypeVar("A", bound=Annotation)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_merged_annotation(descriptor: ClassDescriptor, kind: Type[A]) -> Optional[A]:
    """
    Return the effective annotation of the given kind for a type.

    Args:
        descriptor: The type to inspect.
        kind: The annotation kind to look for.

    Returns:
        Optional[A]: The merged annotation value, or None if the type is
                     neither annotated nor meta-annotated with the kind.
    """
    if not is_annotation_kind(kind):
        raise ValueError(f"Annotation type must be an Annotation subclass, got {kind!r}!")

    direct = descriptor.get_annotation_of_type(kind)
    if direct is not None:
        return direct

    pending: Deque[Annotation] = deque(descriptor.annotations)
    expanded: Set[type] = set()

    while pending:
        current = pending.popleft()
        current_kind = type(current)
        if current_kind is kind:
            return current  # type: ignore[return-value]

        # Meta-annotation graphs may be cyclic
        if current_kind in expanded:
            continue
        expanded.add(current_kind)
        pending.extend(_expand_meta_annotations(current))

    return None


def is_meta_annotated_with(descriptor: ClassDescriptor, kind: type) -> bool:
    """Return whether the type carries the kind directly or through meta-annotations."""
    return get_merged_annotation(descriptor, kind) is not None

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _expand_meta_annotations(annotation: Annotation) -> List[Annotation]:
    """Return the meta-annotations of an annotation value with aliases applied."""
    kind = type(annotation)
    aliases = aliases_of(kind)
    result: List[Annotation] = []

    for meta in meta_annotations_of(kind):
        overrides = {
            target_field: getattr(annotation, own_field)
            for own_field, (target_kind, target_field) in aliases.items()
            if target_kind is type(meta)
        }
        if overrides and dataclasses.is_dataclass(meta):
            meta = dataclasses.replace(meta, **overrides)
        result.append(meta)

    return result
