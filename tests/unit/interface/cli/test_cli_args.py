from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. CSV string parsing logic.
3. Handling of boolean flags (store_true).
"""

from modulescope.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_simple_flags_mapping() -> None:
    args = parse_args(["--single-level", "--classes", "--tree", "--debug"])

    overrides = args_to_overrides(args)

    assert overrides["single_level"] is True
    assert overrides["show_classes"] is True
    assert overrides["show_tree"] is True
    assert overrides["log_level"] == "DEBUG"


def test_cli_csv_list_parsing() -> None:
    args = parse_args(["--annotation", "ApplicationModule, Owner,"])

    overrides = args_to_overrides(args)

    assert overrides["annotation_kinds"] == ["ApplicationModule", "Owner"]


def test_cli_path_arguments() -> None:
    args = parse_args(["-s", "/data/snapshot.json", "-p", "com.acme", "--annotated-with", "Owner"])

    overrides = args_to_overrides(args)

    assert overrides["snapshot_path"] == "/data/snapshot.json"
    assert overrides["base_package"] == "com.acme"
    assert overrides["annotated_with"] == "Owner"


def test_cli_unset_flags_do_not_override() -> None:
    """Absent boolean flags must not shadow persisted values."""
    overrides = args_to_overrides(parse_args([]))

    assert overrides["snapshot_path"] is None
    assert overrides["base_package"] is None
    for key in ("single_level", "show_classes", "show_tree", "log_level", "annotation_kinds"):
        assert key not in overrides


def test_cli_output_and_tool_flags() -> None:
    args = parse_args(["--json", "--dump-config", "--use-defaults", "--save-config"])

    assert args.json_output is True
    assert args.dump_config is True
    assert args.use_defaults is True
    assert args.save_config is True
