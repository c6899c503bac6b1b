from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates parsed argparse
namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the modulescope CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="modulescope",
        description="Inspect the package hierarchy and namespace annotations of a class universe snapshot.",
    )

    # --- Input Selection ---
    p.add_argument(
        "-s", "--snapshot",
        dest="snapshot_path",
        default=None,
        help="Path to the JSON class universe snapshot.",
    )
    p.add_argument(
        "-p", "--package",
        dest="base_package",
        default=None,
        help="Fully-qualified name of the package to inspect.",
    )
    p.add_argument(
        "--single-level",
        action="store_true",
        help="Restrict the view to types residing directly in the package.",
    )

    # --- Annotation Queries ---
    p.add_argument(
        "--annotation",
        dest="annotation_kinds",
        default=None,
        help="Comma-separated annotation kinds to resolve for the package.",
    )
    p.add_argument(
        "--annotated-with",
        dest="annotated_with",
        default=None,
        help="List sub-packages whose description carrier bears this annotation kind.",
    )

    # --- Output Selection ---
    p.add_argument("--classes", action="store_true", help="List all types in scope.")
    p.add_argument("--tree", action="store_true", help="Render the sub-package hierarchy.")
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the report as JSON.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration as the last session.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write log records to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["snapshot_path"] = args.snapshot_path
    overrides["base_package"] = args.base_package
    overrides["annotated_with"] = args.annotated_with
    overrides["log_file"] = args.log_file

    if args.annotation_kinds is not None:
        overrides["annotation_kinds"] = _split_csv(args.annotation_kinds)

    if args.single_level:
        overrides["single_level"] = True
    if args.classes:
        overrides["show_classes"] = True
    if args.tree:
        overrides["show_tree"] = True
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
