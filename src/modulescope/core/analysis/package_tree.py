from __future__ import annotations

"""
Package Tree Renderer.

Converts the sub-package hierarchy of a Package into an ASCII tree,
descending through get_direct_sub_packages() one level at a time.
"""

from typing import List, Optional

from modulescope.core.packages.package import Package

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_package_tree(
        package: Package,
        show_classes: bool = False,
        max_depth: Optional[int] = None,
) -> List[str]:
    """
    Render the package and its descendants.

    Args:
        package: Root of the rendered hierarchy.
        show_classes: List the types residing directly in each package.
        max_depth: Number of sub-package levels to render (None = all).

    Returns:
        List[str]: Visual lines of the tree, starting with the root name.
    """
    lines: List[str] = [package.name]
    _render_children(package, lines, "", show_classes, max_depth, 1)
    return lines

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        package: Package,
        lines: List[str],
        prefix: str,
        show_classes: bool,
        max_depth: Optional[int],
        depth: int,
) -> None:
    """Recursively append the entries below a package using ├── / └── connectors."""
    entries: List[object] = []

    if show_classes:
        entries.extend(sorted(d.simple_name for d in package.to_single().classes))

    if max_depth is None or depth <= max_depth:
        entries.extend(sorted(package.get_direct_sub_packages(), key=lambda p: p.name))

    total = len(entries)
    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        # Scenario A: Entry is a sub-package
        if isinstance(entry, Package):
            lines.append(f"{prefix}{connector}{entry.local_name}")
            new_prefix = prefix + ("    " if is_last else "│   ")
            _render_children(entry, lines, new_prefix, show_classes, max_depth, depth + 1)
            continue

        # Scenario B: Entry is a type name
        lines.append(f"{prefix}{connector}{entry}")
