from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Declares the command-line schema and translates the parsed namespace into
session configuration overrides.
"""

import argparse
from typing import Any, Dict

from contextshare.domain import constants as const
from contextshare.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the ContextShare CLI.
    """
    p = argparse.ArgumentParser(
        prog="contextshare",
        description=i18n.t("app.description"),
    )

    # --- Folder & Selection ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        required=True,
        help=i18n.t("cli.args.input"),
    )
    p.add_argument(
        "-s", "--select",
        dest="selections",
        action="append",
        default=[],
        metavar="PATH",
        help=i18n.t("cli.args.select"),
    )
    p.add_argument(
        "--all",
        dest="select_all",
        action="store_true",
        help=i18n.t("cli.args.all"),
    )

    # --- Output ---
    p.add_argument(
        "--tree",
        action="store_true",
        help=i18n.t("cli.args.tree"),
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help=i18n.t("cli.args.output"),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    p.add_argument(
        "--tokens",
        action="store_true",
        help=i18n.t("cli.args.tokens"),
    )

    # --- Worker Tuning ---
    p.add_argument(
        "--workers",
        dest="max_read_workers",
        type=int,
        default=None,
        help=i18n.t("cli.args.workers"),
    )
    p.add_argument(
        "--process-worker",
        action="store_true",
        help=i18n.t("cli.args.process"),
    )
    p.add_argument(
        "--replace-errors",
        action="store_true",
        help=i18n.t("cli.args.replace"),
    )

    # --- Session ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.use_defaults"),
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the parsed namespace into session configuration overrides.
    """
    overrides: Dict[str, Any] = {}

    overrides["last_folder"] = args.input_path

    if args.max_read_workers is not None:
        overrides["max_read_workers"] = args.max_read_workers
    if args.process_worker:
        overrides["worker_mode"] = const.WORKER_MODE_PROCESS
    if args.replace_errors:
        overrides["encoding_errors"] = "replace"
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
