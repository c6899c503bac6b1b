from __future__ import annotations

"""
Annotation Model.

Annotation kinds are frozen dataclasses deriving from Annotation; an
annotation value is an instance of such a kind. A kind may itself carry
annotations ("meta-annotations"), declared with the meta_annotated
decorator, which makes every type annotated with the kind indirectly
annotated with the meta-annotations as well.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type

# Attribute names under which meta_annotated stores its declarations
_META_ATTR = "__meta_annotations__"
_ALIASES_ATTR = "__annotation_aliases__"

AliasMap = Dict[str, Tuple[type, str]]


class Annotation:
    """Base class of all annotation kinds."""


def meta_annotated(
        *annotations: Annotation,
        aliases: Optional[AliasMap] = None,
) -> Callable[[Type[Annotation]], Type[Annotation]]:
    """
    Declare the meta-annotations carried by an annotation kind.

    Args:
        annotations: Annotation values attached to the decorated kind.
        aliases: Maps a field of the decorated kind to a (kind, field) pair of
                 one of its meta-annotations. When the meta-annotation is
                 resolved through the decorated kind, the aliased field takes
                 the value declared on the decorated kind.

    Returns:
        Callable: Class decorator registering the declarations.
    """
    for item in annotations:
        if not isinstance(item, Annotation):
            raise TypeError(f"Meta-annotation must be an Annotation instance, got {item!r}.")

    def decorator(kind: Type[Annotation]) -> Type[Annotation]:
        if not is_annotation_kind(kind):
            raise TypeError(f"{kind!r} is not an annotation kind.")
        setattr(kind, _META_ATTR, tuple(annotations))
        setattr(kind, _ALIASES_ATTR, dict(aliases or {}))
        return kind

    return decorator


def is_annotation_kind(candidate: object) -> bool:
    """Return whether the candidate is a subclass of Annotation."""
    return isinstance(candidate, type) and issubclass(candidate, Annotation)


def meta_annotations_of(kind: type) -> Tuple[Annotation, ...]:
    """
    Return the meta-annotations declared directly on a kind.

    Declarations are not inherited by subclasses of the kind.
    """
    return tuple(vars(kind).get(_META_ATTR, ()))


def aliases_of(kind: type) -> AliasMap:
    """Return the attribute aliases declared directly on a kind."""
    return dict(vars(kind).get(_ALIASES_ATTR, {}))


def qualified_kind_name(kind: type) -> str:
    """Return the fully-qualified name of an annotation kind."""
    module = getattr(kind, "__module__", "") or ""
    if not module or module == "builtins":
        return kind.__qualname__
    return f"{module}.{kind.__qualname__}"

# -----------------------------------------------------------------------------
# BUILT-IN KINDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PackageInfo(Annotation):
    """Marks a type as the description carrier of the package it resides in."""


@meta_annotated(PackageInfo())
@dataclass(frozen=True)
class ApplicationModule(Annotation):
    """
    Declares the package of the annotated type as an application module.

    Attributes:
        display_name: Human-readable name of the module.
        allowed_dependencies: Names of the modules this one may depend on.
    """
    display_name: str = ""
    allowed_dependencies: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NamedInterface(Annotation):
    """Exposes a package as a named interface of its application module."""
    name: str = ""


BUILTIN_KINDS: Dict[str, Type[Annotation]] = {
    "PackageInfo": PackageInfo,
    "ApplicationModule": ApplicationModule,
    "NamedInterface": NamedInterface,
}
