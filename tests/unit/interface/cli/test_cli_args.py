from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Repeatable selection arguments.
3. Defaults when optional flags are absent.
"""

import pytest

from contextshare.domain import constants as const
from contextshare.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_input_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_minimal_invocation_overrides_only_folder() -> None:
    args = parse_args(["-i", "/repo"])
    assert args_to_overrides(args) == {"last_folder": "/repo"}
    assert args.selections == []
    assert args.select_all is False


def test_select_is_repeatable() -> None:
    args = parse_args(["-i", "/repo", "-s", "a.py", "--select", "pkg"])
    assert args.selections == ["a.py", "pkg"]


def test_worker_flags_mapping() -> None:
    args = parse_args([
        "-i", "/repo",
        "--workers", "4",
        "--process-worker",
        "--replace-errors",
        "--debug",
    ])
    overrides = args_to_overrides(args)

    assert overrides["max_read_workers"] == 4
    assert overrides["worker_mode"] == const.WORKER_MODE_PROCESS
    assert overrides["encoding_errors"] == "replace"
    assert overrides["log_level"] == "DEBUG"


def test_output_flags() -> None:
    args = parse_args(["-i", "/repo", "--all", "--tree", "-o", "out.txt", "--json", "--tokens", "--use-defaults"])

    assert args.select_all is True
    assert args.tree is True
    assert args.output_file == "out.txt"
    assert args.json_output is True
    assert args.tokens is True
    assert args.use_defaults is True
