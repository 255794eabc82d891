from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. push / pull subcommand schemas and defaults.
2. Mapping of CLI flags to configuration overrides.
3. Rejection of incomplete command lines.
"""

import pytest

from yamltree.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_pull_accepts_multiple_paths():
    args = parse_args(["pull", "a", "b", "c"])

    assert args.command == "pull"
    assert args.paths == ["a", "b", "c"]
    assert args.document_path is None


def test_pull_dest_flag_mapping():
    args = parse_args(["pull", "proj", "-d", "tree.yaml", "--sort"])
    overrides = args_to_overrides(args)

    assert overrides["document_path"] == "tree.yaml"
    assert overrides["sort_entries"] is True
    assert overrides["strict_documents"] is None


def test_push_src_flag_mapping():
    args = parse_args(["push", "target", "--src", "in.yaml", "--strict", "--dry-run"])
    overrides = args_to_overrides(args)

    assert args.path == "target"
    assert args.dry_run is True
    assert overrides["document_path"] == "in.yaml"
    assert overrides["strict_documents"] is True
    assert overrides["sort_entries"] is None


def test_global_diagnostic_flags():
    args = parse_args(["--debug", "--log-file", "run.log", "pull", "x"])
    overrides = args_to_overrides(args)

    assert overrides["log_level"] == "DEBUG"
    assert overrides["log_file"] == "run.log"


def test_defaults_leave_overrides_unset():
    """Unset flags map to None so persisted config values win."""
    overrides = args_to_overrides(parse_args(["pull", "x"]))

    assert "log_level" not in overrides
    assert all(v is None for v in overrides.values())


@pytest.mark.parametrize("argv", [[], ["pull"], ["push"], ["push", "a", "b"], ["bogus"]])
def test_incomplete_command_lines_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code == 2
