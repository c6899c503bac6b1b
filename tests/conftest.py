from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared class universes and configuration dictionaries used across tests.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from modulescope.core.universe.classes import Classes  # noqa: E402
from modulescope.domain.class_models import ClassDescriptor  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_universe() -> Classes:
    """
    Return a small class universe spanning a two-level hierarchy.

    Structure:
        a.Other
        a.b.Foo
        a.b.c.Bar
        a.b.d.Baz
    """
    return Classes(
        [
            ClassDescriptor("a.b.Foo"),
            ClassDescriptor("a.b.c.Bar"),
            ClassDescriptor("a.b.d.Baz"),
            ClassDescriptor("a.Other"),
        ],
        description="sample classes",
    )


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'modulescope.domain.config'.
    """
    return {
        # Input
        "snapshot_path": "/tmp/snapshot.json",
        "base_package": "com.acme",

        # Scope & Annotations
        "single_level": False,
        "annotation_kinds": ["ApplicationModule"],
        "annotated_with": "",

        # Output
        "show_classes": False,
        "show_tree": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


@pytest.fixture
def sample_snapshot_data() -> Dict[str, Any]:
    """Return a decoded snapshot describing a small modular application."""
    return {
        "description": "acme shop",
        "annotation_kinds": {
            "Owner": {
                "package": "com.acme.annotations",
                "fields": {"team": ""},
                "meta": ["PackageInfo"],
            },
        },
        "classes": [
            "com.acme.Application",
            {
                "name": "com.acme.orders.__init__",
                "annotations": [
                    {"kind": "ApplicationModule", "values": {"display_name": "Orders"}},
                ],
            },
            "com.acme.orders.Order",
            {"name": "com.acme.orders._OrderRepository"},
            "com.acme.orders.internal.OrderMapper",
            {
                "name": "com.acme.inventory.InventoryInfo",
                "annotations": [{"kind": "Owner", "values": {"team": "logistics"}}],
            },
            "com.acme.inventory.Stock",
        ],
    }


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[Any], Path]:
    """Return a helper writing a snapshot document into the temp directory."""

    def _write(data: Any, name: str = "snapshot.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
