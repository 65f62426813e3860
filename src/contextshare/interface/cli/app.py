from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Headless counterpart of the GUI: opens a folder, applies the requested
selections through the same selection controller, compiles through the
same worker dispatch and writes the artifact to stdout or a file.

Exit codes: 0 success, 1 execution failure, 2 invalid input, 130 interrupted.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from contextshare.core.processing.tokenizer import count_tokens
from contextshare.core.services.session import CompileSession
from contextshare.core.services.validator import validate_config
from contextshare.domain.compilation_models import CompilationResult
from contextshare.domain.config import get_default_config, load_config
from contextshare.infra.fs import normalize_path, write_text_file
from contextshare.infra.logging import LoggingConfig, configure_logging, get_logger
from contextshare.interface.cli import args as cli_args
from contextshare.interface.cli.tree_view import render_display_tree
from contextshare.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID = 2
EXIT_INTERRUPTED = 130


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Arguments and logging (stderr only, stdout carries the artifact)
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING", console=True))

    # 2. Configuration: persisted session + CLI overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    base_conf.update(cli_args.args_to_overrides(args))
    config, warnings = validate_config(base_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration constraint: {w}")

    # 3. Folder snapshot
    root = normalize_path(config["last_folder"])
    if not root or not os.path.isdir(root):
        return _fail(i18n.t("cli.errors.path_not_exist", path=root), EXIT_INVALID)

    session = CompileSession(config)
    try:
        session.open_folder(root)
    except OSError as e:
        return _fail(str(e), EXIT_INVALID)

    # 4. Selection
    if args.select_all:
        session.selection.select_all(True)
    for raw in args.selections:
        target = _resolve_selection(raw, session.root)
        if session.selection.node(target) is None:
            return _fail(i18n.t("cli.errors.not_in_tree", path=raw), EXIT_INVALID)
        session.toggle_path(target, True)

    if args.tree:
        print("\n".join(render_display_tree(session.display_tree())))
        if session.selected_count == 0:
            return EXIT_OK

    # 5. Compilation
    try:
        result = session.compile()
    except ValueError:
        return _fail(i18n.t("cli.errors.no_selection"), EXIT_INVALID)
    except KeyboardInterrupt:
        return _fail(i18n.t("cli.status.interrupted"), EXIT_INTERRUPTED)

    if not result.ok:
        return _fail(i18n.t("cli.errors.compile_failed", error=result.error), EXIT_FAILURE)

    # 6. Output
    return _emit(result, args, config)


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _resolve_selection(raw: str, root: str) -> str:
    path = raw if os.path.isabs(raw) else os.path.join(root, raw)
    return os.path.abspath(path)


def _emit(result: CompilationResult, args: Any, config: Dict[str, Any]) -> int:
    token_count = count_tokens(result.text, config["target_model"]) if args.tokens else None

    if args.output_file:
        try:
            path = write_text_file(args.output_file, result.text)
        except OSError as e:
            return _fail(i18n.t("cli.errors.save_failed", error=str(e)), EXIT_FAILURE)
        print(i18n.t("cli.status.saved", count=result.file_count, path=path), file=sys.stderr)

    if args.json_output:
        payload = asdict(result)
        if args.output_file:
            payload.pop("text")
        if token_count is not None:
            payload["token_count"] = token_count
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    elif not args.output_file:
        sys.stdout.write(result.text)
        sys.stdout.flush()

    if result.failed_files:
        print(i18n.t("cli.status.failed_files", count=len(result.failed_files)), file=sys.stderr)
    if token_count is not None:
        print(i18n.t("cli.status.tokens", count=f"{token_count:,}"), file=sys.stderr)
    return EXIT_OK


def _fail(msg: str, code: int) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
