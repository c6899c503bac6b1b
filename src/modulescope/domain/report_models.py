from __future__ import annotations

"""
Package Report Data Models.

Defines the result structure exchanged between the inspection service and
the interface layers, plus the factories building it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class PackageReport:
    """
    Result of inspecting one package of a class universe.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        snapshot_path: The snapshot the universe was loaded from.
        name: Fully-qualified name of the inspected package.
        local_name: Last segment of the package name.
        single_level: Whether descendant packages were excluded.
        description: Description of the class universe.
        class_count: Number of types in the inspected scope.
        sub_packages: Names of the direct sub-packages.
        exposed_classes: Names of the public, non-marker types.
        classes: Names of all types in scope (only when requested).
        annotations: Resolved annotation values keyed by kind name.
        annotated_with: Kind name used to select annotated sub-packages.
        annotated_sub_packages: Packages whose carrier bears that kind.
        tree_lines: ASCII rendering of the package hierarchy.
    """
    ok: bool
    error: str

    snapshot_path: str
    name: str
    local_name: str = ""
    single_level: bool = False
    description: str = ""

    class_count: int = 0
    sub_packages: List[str] = field(default_factory=list)
    exposed_classes: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)

    annotations: Dict[str, Optional[Dict[str, Any]]] = field(default_factory=dict)
    annotated_with: str = ""
    annotated_sub_packages: List[str] = field(default_factory=list)

    tree_lines: List[str] = field(default_factory=list)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_report(error: str, cfg: Dict[str, Any]) -> PackageReport:
    """
    Create a failed report.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
    """
    return PackageReport(
        ok=False,
        error=error,
        snapshot_path=cfg.get("snapshot_path", ""),
        name=cfg.get("base_package", ""),
        single_level=bool(cfg.get("single_level", False)),
    )


def create_success_report(cfg: Dict[str, Any], **details: Any) -> PackageReport:
    """
    Create a successful report.

    Args:
        cfg: Final configuration used during the inspection.
        details: Remaining PackageReport fields.
    """
    return PackageReport(
        ok=True,
        error="",
        snapshot_path=cfg.get("snapshot_path", ""),
        name=cfg.get("base_package", ""),
        single_level=bool(cfg.get("single_level", False)),
        **details,
    )
