from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, persistent storage and CLI
overrides), package inspection and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from modulescope.core.services.inspector import inspect_package
from modulescope.core.services.validator import validate_config
from modulescope.domain.config import get_default_config, load_config, save_config
from modulescope.domain.errors import AmbiguousAnnotationError
from modulescope.domain.report_models import PackageReport
from modulescope.infra.logging import LoggingConfig, configure_logging, get_logger
from modulescope.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_AMBIGUOUS = 3
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only until the configuration is known)
    bootstrap_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=bootstrap_level, console=True, log_file=None))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if clean_conf["log_level"] != bootstrap_level or clean_conf["log_file"]:
        configure_logging(
            LoggingConfig(level=clean_conf["log_level"], console=True, log_file=clean_conf["log_file"] or None),
            force=True,
        )

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        save_config(clean_conf)

    # 6. Pre-flight input verification
    snapshot_path = clean_conf.get("snapshot_path", "")
    if not snapshot_path or not os.path.isfile(snapshot_path):
        msg = f"Snapshot file does not exist: '{snapshot_path}'"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if not clean_conf.get("base_package"):
        msg = "No package given. Use -p/--package."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 7. Inspection phase
    logger.info(f"Inspecting package '{clean_conf['base_package']}' of {snapshot_path}")
    try:
        report = inspect_package(clean_conf)
    except AmbiguousAnnotationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_AMBIGUOUS
    except KeyboardInterrupt:
        logger.warning("Inspection interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Inspection failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 8. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(report), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(report)

    return EXIT_OK if report.ok else EXIT_INVALID_INPUT

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with non-None values are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "snapshot_path", "base_package", "single_level",
        "annotation_kinds", "annotated_with",
        "show_classes", "show_tree",
        "log_level", "log_file",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(report: PackageReport) -> None:
    """
    Format and print the inspection result to the standard output.

    Args:
        report: The report to render.
    """
    if not report.ok:
        print(f"ERROR: {report.error}", file=sys.stderr)
        return

    scope = "single level" if report.single_level else "including sub-packages"
    print(f"Package: {report.name} ({report.local_name}, {scope})")
    print(f"Universe: {report.description}")
    print(f"Types in scope: {report.class_count}")

    if report.tree_lines:
        print("\n" + "\n".join(report.tree_lines))
    elif report.sub_packages:
        print("\nDirect sub-packages:")
        for name in report.sub_packages:
            print(f"  - {name}")

    if report.exposed_classes:
        print("\nExposed types:")
        for name in report.exposed_classes:
            print(f"  - {name}")

    if report.classes:
        print("\nAll types:")
        for name in report.classes:
            print(f"  - {name}")

    if report.annotations:
        print("\nAnnotations:")
        for kind, value in report.annotations.items():
            rendered = "(none)" if value is None else json.dumps(value, ensure_ascii=False)
            print(f"  @{kind}: {rendered}")

    if report.annotated_with:
        print(f"\nSub-packages annotated with @{report.annotated_with}:")
        for name in report.annotated_sub_packages or ["(none)"]:
            print(f"  - {name}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
