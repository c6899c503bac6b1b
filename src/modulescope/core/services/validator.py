from __future__ import annotations

"""
Configuration Validation Service.

Ensures that a session configuration assembled from defaults, the
persisted state and CLI overrides conforms to the expected schema.
Handles type coercion, path normalization and default injection.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from modulescope.domain.config import get_default_config
from modulescope.infra.fs import normalize_path
from modulescope.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

# A dotted sequence of identifiers, e.g. 'com.acme.orders'
_PACKAGE_NAME_RX = re.compile(r"^[A-Za-z_][\w]*(\.[A-Za-z_][\w]*)*$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = ["snapshot_path", "base_package", "annotated_with", "log_level", "log_file"]
    bool_fields = ["single_level", "show_classes", "show_tree"]

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults.get(field, ""), field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults.get(field, False), field, warnings, strict)

    merged["annotation_kinds"] = _as_list_str(
        merged.get("annotation_kinds"), defaults["annotation_kinds"], "annotation_kinds", warnings, strict
    )

    # Domain-specific normalization
    merged["snapshot_path"] = normalize_path(merged["snapshot_path"])
    merged["log_file"] = normalize_path(merged["log_file"])
    merged["base_package"] = _normalize_package_name(merged["base_package"], warnings, strict)
    merged["log_level"] = _normalize_level(merged["log_level"], warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_package_name(name: str, warnings: List[str], strict: bool) -> str:
    """Strip stray separators and check the dotted identifier syntax."""
    cleaned = name.strip().strip(".")
    if cleaned != name:
        warnings.append(f"Package name '{name}' corrected to '{cleaned}'.")
    if cleaned and not _PACKAGE_NAME_RX.match(cleaned):
        msg = f"Invalid package name '{cleaned}': expected dotted identifiers."
        if strict:
            raise ValueError(msg)
        warnings.append(msg)
    return cleaned


def _normalize_level(level: str, warnings: List[str], strict: bool) -> str:
    upper = level.strip().upper()
    if upper in _LEVEL_MAP:
        return upper

    msg = f"Unknown log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using INFO.")
    return "INFO"
