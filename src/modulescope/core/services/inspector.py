from __future__ import annotations

"""
Package Inspection Service.

Orchestrates a single inspection run: loads the class universe snapshot,
builds the Package view for the configured namespace and gathers its
sub-packages, exposed types and resolved annotations into a PackageReport.
"""

import dataclasses
import logging
from typing import Any, Dict, List, Optional

from modulescope.core.analysis.package_tree import render_package_tree
from modulescope.core.packages.package import Package
from modulescope.core.snapshot.loader import ClassSnapshot, list_kind_names, load_snapshot
from modulescope.domain.errors import SnapshotError
from modulescope.domain.report_models import (
    PackageReport,
    create_error_report,
    create_success_report,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def inspect_package(cfg: Dict[str, Any], snapshot: Optional[ClassSnapshot] = None) -> PackageReport:
    """
    Inspect the configured package of a class universe.

    Input problems (missing snapshot, unknown annotation kinds, empty package
    name) produce a failed report. An ambiguous annotation configuration in
    the analyzed codebase is not an input problem and propagates.

    Args:
        cfg: Validated session configuration.
        snapshot: Already loaded snapshot; read from cfg['snapshot_path'] if None.

    Returns:
        PackageReport: The inspection result.

    Raises:
        AmbiguousAnnotationError: If several types of the package carry one of
                                  the requested annotation kinds.
    """
    base_package = cfg.get("base_package", "")
    if not base_package:
        return create_error_report("Base package must not be empty.", cfg)

    # 1. Class universe acquisition
    if snapshot is None:
        try:
            snapshot = load_snapshot(cfg.get("snapshot_path", ""))
        except SnapshotError as e:
            logger.error(f"Snapshot loading failed: {e}")
            return create_error_report(str(e), cfg)

    # 2. Annotation kinds resolution
    try:
        kinds = {name: snapshot.resolve_kind(name) for name in cfg.get("annotation_kinds", [])}
        annotated_with = cfg.get("annotated_with", "")
        selector_kind = snapshot.resolve_kind(annotated_with) if annotated_with else None
    except SnapshotError as e:
        logger.error(f"Annotation kind resolution failed: {e}")
        return create_error_report(f"{e} Known kinds: {', '.join(list_kind_names(snapshot))}.", cfg)

    # 3. Package view
    package = Package.of(snapshot.classes, base_package)
    if cfg.get("single_level"):
        package = package.to_single()

    if not len(package):
        logger.warning(f"No types found in package '{base_package}'.")

    logger.debug(f"Inspecting {package!r} over {snapshot.classes!r}")

    # 4. Annotation resolution (ambiguity escalates to the caller)
    annotations: Dict[str, Optional[Dict[str, Any]]] = {}
    for name, kind in kinds.items():
        annotations[name] = _annotation_to_dict(package.find_annotation(kind))

    annotated_sub_packages: List[str] = []
    if selector_kind is not None:
        annotated_sub_packages = sorted(p.name for p in package.get_sub_packages_annotated_with(selector_kind))

    tree_lines: List[str] = []
    if cfg.get("show_tree"):
        tree_lines = render_package_tree(package, show_classes=bool(cfg.get("show_classes")))

    return create_success_report(
        cfg,
        local_name=package.local_name,
        description=package.description,
        class_count=len(package),
        sub_packages=sorted(p.name for p in package.get_direct_sub_packages()),
        exposed_classes=package.get_exposed_classes().names(),
        classes=package.classes.names() if cfg.get("show_classes") else [],
        annotations=annotations,
        annotated_with=annotated_with,
        annotated_sub_packages=annotated_sub_packages,
        tree_lines=tree_lines,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _annotation_to_dict(value: Any) -> Optional[Dict[str, Any]]:
    """Convert a resolved annotation into JSON-friendly attributes."""
    if value is None:
        return None
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    return {"value": repr(value)}
