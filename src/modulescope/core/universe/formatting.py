from __future__ import annotations

"""
Type Name Formatting.

Renders fully-qualified names in the compact forms used by diagnostics
and by the human-readable package summaries.
"""

from itertools import takewhile
from typing import Union

from modulescope.domain.annotations import qualified_kind_name
from modulescope.domain.constants import PACKAGE_SEPARATOR


def abbreviate_type_name(type_or_name: Union[str, type]) -> str:
    """
    Abbreviate every package segment of a fully-qualified name to its initial.

    'com.acme.annotations.Owner' becomes 'c.a.a.Owner'.

    Args:
        type_or_name: Fully-qualified name or an annotation kind class.

    Returns:
        str: The abbreviated name.
    """
    full_name = type_or_name if isinstance(type_or_name, str) else qualified_kind_name(type_or_name)
    segments = full_name.split(PACKAGE_SEPARATOR)
    # Nested class names keep their full spelling
    packages = list(takewhile(lambda s: s and not s[0].isupper(), segments[:-1]))
    abbreviated = [s[0] for s in packages]
    return PACKAGE_SEPARATOR.join(abbreviated + segments[len(packages):])


def format_relative_name(name: str, base_package: str) -> str:
    """Replace the base package prefix of a name with an ellipsis."""
    prefix = base_package + PACKAGE_SEPARATOR
    if base_package and name.startswith(prefix):
        return "…" + name[len(base_package):]
    return name
