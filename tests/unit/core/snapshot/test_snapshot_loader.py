from __future__ import annotations

"""
Unit tests for the Class Universe Snapshot Loader.

Verifies:
1. Parsing of classes, modifiers and annotations.
2. Declaration of custom annotation kinds with meta-annotations and aliases.
3. Resolution of built-in, declared and importable kinds.
4. Error reporting for missing, unreadable and malformed snapshots.
"""

import dataclasses
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from modulescope.core.snapshot.loader import list_kind_names, load_snapshot, parse_snapshot
from modulescope.core.universe.reflection import get_merged_annotation
from modulescope.domain.annotations import (
    ApplicationModule,
    NamedInterface,
    PackageInfo,
    qualified_kind_name,
)
from modulescope.domain.class_models import Modifier
from modulescope.domain.errors import SnapshotError

# -----------------------------------------------------------------------------
# LOADING
# -----------------------------------------------------------------------------

def test_load_snapshot_from_file(
        write_snapshot: Callable[[Any], Path],
        sample_snapshot_data: Dict[str, Any],
) -> None:
    path = write_snapshot(sample_snapshot_data)

    snapshot = load_snapshot(str(path))

    assert snapshot.source == str(path)
    assert snapshot.classes.description == "acme shop"
    assert len(snapshot.classes) == 7
    assert snapshot.classes.contains("com.acme.orders.internal.OrderMapper")


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(str(tmp_path / "missing.json"))
    with pytest.raises(SnapshotError):
        load_snapshot("")


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{ not json", encoding="utf-8")

    with pytest.raises(SnapshotError, match="Invalid JSON"):
        load_snapshot(str(path))


def test_default_description_mentions_source() -> None:
    snapshot = parse_snapshot({"classes": ["a.Foo"]}, source="inline")

    assert snapshot.classes.description == "classes of inline"

# -----------------------------------------------------------------------------
# CLASSES
# -----------------------------------------------------------------------------

def test_modifiers_default_to_naming_convention(sample_snapshot_data: Dict[str, Any]) -> None:
    snapshot = parse_snapshot(sample_snapshot_data)
    by_name = {d.name: d for d in snapshot.classes}

    assert by_name["com.acme.orders.Order"].modifiers == frozenset({Modifier.PUBLIC})
    assert by_name["com.acme.orders._OrderRepository"].modifiers == frozenset({Modifier.PRIVATE})
    assert by_name["com.acme.orders.__init__"].modifiers == frozenset({Modifier.PUBLIC})


def test_explicit_modifiers() -> None:
    snapshot = parse_snapshot({"classes": [{"name": "a.Base", "modifiers": ["PUBLIC", "abstract"]}]})

    descriptor = next(iter(snapshot.classes))
    assert descriptor.modifiers == frozenset({Modifier.PUBLIC, Modifier.ABSTRACT})


def test_builtin_annotation_values(sample_snapshot_data: Dict[str, Any]) -> None:
    snapshot = parse_snapshot(sample_snapshot_data)
    marker = next(d for d in snapshot.classes if d.name == "com.acme.orders.__init__")

    assert marker.get_annotation_of_type(ApplicationModule) == ApplicationModule(display_name="Orders")


def test_list_values_become_tuples() -> None:
    snapshot = parse_snapshot(
        {
            "classes": [
                {
                    "name": "a.__init__",
                    "annotations": [
                        {"kind": "ApplicationModule", "values": {"allowed_dependencies": ["b", "c"]}},
                    ],
                },
            ],
        }
    )

    value = next(iter(snapshot.classes)).get_annotation_of_type(ApplicationModule)
    assert value.allowed_dependencies == ("b", "c")


@pytest.mark.parametrize(
    "data, message",
    [
        ([], "must be a JSON object"),
        ({}, "'classes' list"),
        ({"classes": [42]}, "invalid class entry"),
        ({"classes": [{"modifiers": []}]}, "without a name"),
        ({"classes": [{"name": "a.Foo", "modifiers": ["sealed"]}]}, "sealed"),
        ({"classes": [{"name": "a.Foo", "annotations": "Owner"}]}, "must be a list"),
        ({"classes": [{"name": "a.Foo", "annotations": ["Unknown"]}]}, "Unknown annotation kind"),
        ({"classes": [{"name": "a.Foo", "annotations": [{"kind": "NamedInterface", "values": {"x": 1}}]}]},
         "invalid values"),
        ({"classes": ["a.b.Foo", "a.b.Foo"]}, "duplicate type a.b.Foo"),
        ({"classes": [{"name": "a.Foo"}, {"name": "a.Foo", "modifiers": ["private"]}]}, "duplicate type"),
        ({"classes": [{"name": "a.__init__", "annotations": [{"kind": "ApplicationModule",
                                                             "values": {"display_name": {"en": "A"}}}]}]},
         "nested objects"),
    ],
)
def test_malformed_snapshots(data: Any, message: str) -> None:
    with pytest.raises(SnapshotError, match=message):
        parse_snapshot(data)

# -----------------------------------------------------------------------------
# ANNOTATION KINDS
# -----------------------------------------------------------------------------

def test_declared_kind_with_meta_annotation(sample_snapshot_data: Dict[str, Any]) -> None:
    snapshot = parse_snapshot(sample_snapshot_data)
    owner = snapshot.resolve_kind("Owner")
    info = next(d for d in snapshot.classes if d.name == "com.acme.inventory.InventoryInfo")

    assert dataclasses.is_dataclass(owner)
    assert qualified_kind_name(owner) == "com.acme.annotations.Owner"
    assert get_merged_annotation(info, owner) == owner(team="logistics")
    assert get_merged_annotation(info, PackageInfo) == PackageInfo()


def test_declared_kinds_may_reference_each_other() -> None:
    snapshot = parse_snapshot(
        {
            "annotation_kinds": {
                "Team": {
                    "fields": {"owner": ""},
                    "meta": [{"kind": "Owner", "values": {"team": "default"}}],
                    "aliases": {"owner": ["Owner", "team"]},
                },
                "Owner": {"fields": {"team": ""}, "meta": ["PackageInfo"]},
            },
            "classes": [
                {"name": "a.Config", "annotations": [{"kind": "Team", "values": {"owner": "billing"}}]},
            ],
        }
    )
    owner = snapshot.resolve_kind("Owner")
    config = next(iter(snapshot.classes))

    assert get_merged_annotation(config, owner) == owner(team="billing")
    assert qualified_kind_name(owner) == "snapshot.Owner"


def test_resolve_kind_sources(sample_snapshot_data: Dict[str, Any]) -> None:
    snapshot = parse_snapshot(sample_snapshot_data)

    assert snapshot.resolve_kind("NamedInterface") is NamedInterface
    assert snapshot.resolve_kind("modulescope.domain.annotations.ApplicationModule") is ApplicationModule
    assert list_kind_names(snapshot) == ["ApplicationModule", "NamedInterface", "Owner", "PackageInfo"]


@pytest.mark.parametrize(
    "name",
    ["", "Missing", "modulescope.domain.annotations.meta_annotated", "no.such.module.Kind"],
)
def test_resolve_kind_failures(name: str, sample_snapshot_data: Dict[str, Any]) -> None:
    snapshot = parse_snapshot(sample_snapshot_data)

    with pytest.raises(SnapshotError):
        snapshot.resolve_kind(name)


def test_invalid_kind_declarations() -> None:
    with pytest.raises(SnapshotError, match="must be an object"):
        parse_snapshot({"annotation_kinds": [], "classes": []})
    with pytest.raises(SnapshotError, match="\\[kind, field\\] pair"):
        parse_snapshot({"annotation_kinds": {"K": {"aliases": {"x": "Owner"}}}, "classes": []})
    with pytest.raises(SnapshotError, match="invalid declaration"):
        parse_snapshot({"annotation_kinds": {"K": {"fields": {"not valid": 1}}}, "classes": []})
    with pytest.raises(SnapshotError, match="invalid declaration of kind 'K': nested objects"):
        parse_snapshot({"annotation_kinds": {"K": {"fields": {"labels": [{"a": 1}]}}}, "classes": []})
