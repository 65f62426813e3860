from __future__ import annotations

"""
Compilation Engine.

Turns an unordered selection into the deterministic artifact. Paths are
sorted first, every file is read concurrently (fan-out, join-all, no
short-circuit) and the blocks are concatenated in sorted order. A failed
read becomes an inline error block; it never fails the job.

``compile_files`` is a module-level function with plain arguments so it can
run unchanged in a thread or in a child process.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from contextshare.core.compilation.formatter import relative_display_path, render_artifact
from contextshare.core.compilation.reader import read_file_outcome
from contextshare.domain.compilation_models import (
    CompilationResult,
    FileReadFailure,
    FileReadOutcome,
    create_success_result,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_READ_WORKERS = 8


def compile_files(
        paths: Sequence[str],
        root: str,
        *,
        max_workers: Optional[int] = None,
        encoding: str = "utf-8",
        errors: str = "strict",
) -> CompilationResult:
    """
    Read and render the selected files into one artifact.

    Args:
        paths: Absolute file paths, in any order.
        root: Directory the header paths are made relative to.
        max_workers: Size of the read fan-out pool.
        encoding: Text encoding of the files.
        errors: Codec error policy.

    Returns:
        CompilationResult: Always ``ok``; unreadable files are listed in
        ``failed_files`` and rendered inline.
    """
    ordered: List[str] = sorted(paths)
    outcomes = _read_all(ordered, max_workers or DEFAULT_MAX_READ_WORKERS, encoding, errors)

    failures: List[FileReadFailure] = []
    for outcome in outcomes:
        if not outcome.ok:
            rel_path = relative_display_path(outcome.file_path, root)
            failures.append(FileReadFailure(rel_path=rel_path, error=outcome.error or ""))
            logger.warning(f"Read failed for {rel_path}: {outcome.error}")

    logger.info(f"Compiled {len(ordered)} file(s), {len(failures)} failed")
    return create_success_result(render_artifact(outcomes, root), len(ordered), failures)


def _read_all(
        ordered: List[str],
        max_workers: int,
        encoding: str,
        errors: str
) -> List[FileReadOutcome]:
    """Submit every read before waiting on any, then join in input order."""
    if not ordered:
        return []

    with ThreadPoolExecutor(
            max_workers=min(max_workers, len(ordered)),
            thread_name_prefix="CompileReader"
    ) as executor:
        futures: List[Future[FileReadOutcome]] = [
            executor.submit(read_file_outcome, path, encoding, errors) for path in ordered
        ]
        return [f.result() for f in futures]
