from __future__ import annotations

"""
Class Universe Snapshot Loader.

Reads a JSON description of a class universe produced by an external
analyzer. The snapshot lists types with their modifiers and annotations
and may declare custom annotation kinds, including their meta-annotations,
so that namespace-level metadata can be resolved without importing the
analyzed code.

Format:
    {
      "description": "orders service",
      "annotation_kinds": {
        "Owner": {"package": "com.acme", "fields": {"team": ""},
                  "meta": ["PackageInfo"], "aliases": {}}
      },
      "classes": [
        "com.acme.orders.Order",
        {"name": "com.acme.orders.__init__",
         "annotations": [{"kind": "Owner", "values": {"team": "core"}}]}
      ]
    }
"""

import dataclasses
import importlib
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Set, Tuple, Type

from modulescope.core.universe.classes import Classes
from modulescope.domain.annotations import (
    BUILTIN_KINDS,
    Annotation,
    is_annotation_kind,
    meta_annotated,
)
from modulescope.domain.class_models import ClassDescriptor, Modifier
from modulescope.domain.errors import SnapshotError

logger = logging.getLogger(__name__)

DEFAULT_KIND_MODULE = "snapshot"

# -----------------------------------------------------------------------------
# DATA MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassSnapshot:
    """
    A class universe together with the annotation kinds it declares.

    Attributes:
        classes: The loaded class universe.
        kinds: Annotation kinds declared by the snapshot, keyed by name.
        source: Path (or label) the snapshot was read from.
    """
    classes: Classes
    kinds: Dict[str, Type[Annotation]] = field(default_factory=dict)
    source: str = ""

    def resolve_kind(self, name: str) -> Type[Annotation]:
        """
        Resolve an annotation kind by name.

        Declared kinds win over built-in ones; dotted names are imported.

        Raises:
            SnapshotError: If the name does not denote an annotation kind.
        """
        return _resolve_kind(name, self.kinds)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_snapshot(path: str) -> ClassSnapshot:
    """
    Read and parse a snapshot file.

    Args:
        path: Path to the JSON snapshot.

    Returns:
        ClassSnapshot: The parsed snapshot.

    Raises:
        SnapshotError: If the file cannot be read or is malformed.
    """
    if not path or not os.path.isfile(path):
        raise SnapshotError(f"Snapshot file not found: '{path}'")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Could not read snapshot '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot '{path}': {e.msg} (line {e.lineno})") from e

    snapshot = parse_snapshot(data, source=path)
    logger.info(f"Loaded {len(snapshot.classes)} types from snapshot: {path}")
    return snapshot


def parse_snapshot(data: Any, source: str = "<memory>") -> ClassSnapshot:
    """
    Build a ClassSnapshot from already decoded JSON data.

    Args:
        data: Decoded snapshot document.
        source: Label used in the universe description and error messages.
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {source} must be a JSON object, got {type(data).__name__}.")

    declarations = data.get("annotation_kinds")
    kinds = _declare_kinds({} if declarations is None else declarations, source)

    entries = data.get("classes")
    if not isinstance(entries, list):
        raise SnapshotError(f"Snapshot {source} must contain a 'classes' list.")

    descriptors = [_parse_class(entry, kinds, source) for entry in entries]
    _check_unique_names(descriptors, source)
    description = str(data.get("description") or f"classes of {source}")

    try:
        classes = Classes(descriptors, description=description)
    except ValueError as e:
        raise SnapshotError(f"Snapshot {source}: {e}") from e

    return ClassSnapshot(classes=classes, kinds=kinds, source=source)


def list_kind_names(snapshot: ClassSnapshot) -> List[str]:
    """Return the names of all kinds resolvable without an import."""
    return sorted(set(snapshot.kinds) | set(BUILTIN_KINDS))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: ANNOTATION KINDS
# -----------------------------------------------------------------------------

def _declare_kinds(declarations: Any, source: str) -> Dict[str, Type[Annotation]]:
    """Create the declared kinds first, then attach their meta-annotations."""
    if not isinstance(declarations, dict):
        raise SnapshotError(f"Snapshot {source}: 'annotation_kinds' must be an object.")

    kinds: Dict[str, Type[Annotation]] = {}
    for name, declaration in declarations.items():
        if not isinstance(declaration, dict):
            raise SnapshotError(f"Snapshot {source}: declaration of kind '{name}' must be an object.")
        kinds[name] = _make_kind(name, declaration, source)

    # Meta-annotations may reference kinds declared later in the document
    for name, declaration in declarations.items():
        meta = [_parse_annotation(item, kinds, source) for item in declaration.get("meta") or []]
        aliases = _parse_aliases(name, declaration.get("aliases") or {}, kinds, source)
        if meta or aliases:
            meta_annotated(*meta, aliases=aliases)(kinds[name])

    if kinds:
        logger.debug(f"Declared annotation kinds: {', '.join(sorted(kinds))}")
    return kinds


def _make_kind(name: str, declaration: Dict[str, Any], source: str) -> Type[Annotation]:
    field_defaults = declaration.get("fields") or {}
    if not isinstance(field_defaults, dict):
        raise SnapshotError(f"Snapshot {source}: fields of kind '{name}' must be an object.")

    try:
        fields = [
            (field_name, Any, dataclasses.field(default=_freeze(default)))
            for field_name, default in field_defaults.items()
        ]
        kind = dataclasses.make_dataclass(
            name,
            fields,
            bases=(Annotation,),
            frozen=True,
        )
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Snapshot {source}: invalid declaration of kind '{name}': {e}") from e

    # Drives the qualified name shown in diagnostics
    kind.__module__ = str(declaration.get("package") or DEFAULT_KIND_MODULE)
    return kind


def _parse_aliases(
        name: str,
        aliases: Any,
        kinds: Dict[str, Type[Annotation]],
        source: str,
) -> Dict[str, Tuple[type, str]]:
    if not isinstance(aliases, dict):
        raise SnapshotError(f"Snapshot {source}: aliases of kind '{name}' must be an object.")

    result: Dict[str, Tuple[type, str]] = {}
    for own_field, target in aliases.items():
        if not isinstance(target, list) or len(target) != 2:
            raise SnapshotError(
                f"Snapshot {source}: alias '{name}.{own_field}' must be a [kind, field] pair."
            )
        result[own_field] = (_resolve_kind(target[0], kinds), str(target[1]))
    return result


def _resolve_kind(name: Any, declared: Mapping[str, Type[Annotation]]) -> Type[Annotation]:
    if not isinstance(name, str) or not name.strip():
        raise SnapshotError(f"Annotation kind name must be a non-empty string, got {name!r}.")
    name = name.strip()

    if name in declared:
        return declared[name]
    if name in BUILTIN_KINDS:
        return BUILTIN_KINDS[name]

    module_name, _, attr = name.rpartition(".")
    if module_name:
        try:
            candidate = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as e:
            raise SnapshotError(f"Unknown annotation kind '{name}': {e}") from e
        if is_annotation_kind(candidate):
            return candidate
        raise SnapshotError(f"'{name}' is not an annotation kind.")

    raise SnapshotError(f"Unknown annotation kind '{name}'.")


def _parse_annotation(item: Any, kinds: Mapping[str, Type[Annotation]], source: str) -> Annotation:
    """Accept either a bare kind name or a {'kind': ..., 'values': {...}} object."""
    if isinstance(item, str):
        kind_name, values = item, {}
    elif isinstance(item, dict):
        kind_name, values = item.get("kind"), item.get("values") or {}
    else:
        raise SnapshotError(f"Snapshot {source}: invalid annotation entry {item!r}.")

    kind = _resolve_kind(kind_name, kinds)
    if not isinstance(values, dict):
        raise SnapshotError(f"Snapshot {source}: values of @{kind_name} must be an object.")

    try:
        return kind(**{k: _freeze(v) for k, v in values.items()})
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Snapshot {source}: invalid values for @{kind_name}: {e}") from e

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: CLASSES
# -----------------------------------------------------------------------------

def _parse_class(entry: Any, kinds: Mapping[str, Type[Annotation]], source: str) -> ClassDescriptor:
    if isinstance(entry, str):
        entry = {"name": entry}
    if not isinstance(entry, dict):
        raise SnapshotError(f"Snapshot {source}: invalid class entry {entry!r}.")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SnapshotError(f"Snapshot {source}: class entry without a name: {entry!r}.")
    name = name.strip()

    raw_modifiers = entry.get("modifiers")
    modifiers = (
        _parse_modifiers(raw_modifiers, name, source)
        if raw_modifiers is not None
        else _default_modifiers(name)
    )
    raw_annotations = entry.get("annotations") or []
    if not isinstance(raw_annotations, list):
        raise SnapshotError(f"Snapshot {source}: annotations of {name} must be a list.")
    annotations = [_parse_annotation(a, kinds, source) for a in raw_annotations]

    return ClassDescriptor(name=name, modifiers=modifiers, annotations=tuple(annotations))


def _parse_modifiers(raw: Any, class_name: str, source: str) -> FrozenSet[Modifier]:
    if not isinstance(raw, list):
        raise SnapshotError(f"Snapshot {source}: modifiers of {class_name} must be a list.")
    try:
        return frozenset(Modifier(str(m).strip().lower()) for m in raw)
    except ValueError as e:
        raise SnapshotError(f"Snapshot {source}: {class_name}: {e}") from e


def _default_modifiers(class_name: str) -> FrozenSet[Modifier]:
    """Apply the Python convention: a leading underscore marks a private type."""
    simple_name = class_name.rpartition(".")[2]
    if simple_name.startswith("_") and not simple_name.startswith("__"):
        return frozenset({Modifier.PRIVATE})
    return frozenset({Modifier.PUBLIC})


def _check_unique_names(descriptors: List[ClassDescriptor], source: str) -> None:
    seen: Set[str] = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise SnapshotError(f"Snapshot {source}: duplicate type {descriptor.name}")
        seen.add(descriptor.name)


def _freeze(value: Any) -> Any:
    """
    Turn JSON lists into tuples so annotation values stay hashable.

    Raises:
        ValueError: For nested objects, which have no annotation attribute form.
    """
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, dict):
        raise ValueError("nested objects are not supported as annotation values")
    return value
