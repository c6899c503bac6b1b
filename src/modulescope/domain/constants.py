from __future__ import annotations

"""
Domain Constants.

Centralizes the naming conventions shared by the package abstraction,
the snapshot loader and the interface layers.
"""

from typing import List

CURRENT_CONFIG_VERSION = "1.0.0"

# Separator between namespace segments of a fully-qualified name
PACKAGE_SEPARATOR = "."

# Simple name of the type standing in for a package itself
PACKAGE_INFO_NAME = "__init__"

DEFAULT_ANNOTATION_KINDS: List[str] = ["ApplicationModule"]
