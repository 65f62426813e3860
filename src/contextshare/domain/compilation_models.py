from __future__ import annotations

"""
Compilation Domain Data Models.

Result objects exchanged between the compilation engine, the worker
dispatcher and the interface layers. All of them are immutable so they can
travel back from a worker as a single message.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# PER-FILE OUTCOMES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileReadOutcome:
    """
    Result of reading a single selected file.

    Attributes:
        file_path: Absolute path that was read.
        content: Decoded text, or None if the read failed.
        error: Failure message, or None on success.
    """
    file_path: str
    content: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FileReadFailure:
    """
    A file whose read failed, reported inline in the artifact.

    Attributes:
        rel_path: Path relative to the compile root.
        error: Descriptive error message.
    """
    rel_path: str
    error: str


# -----------------------------------------------------------------------------
# JOB RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompilationResult:
    """
    Aggregated result of one compile job.

    ``ok`` is False only for execution-level failures (the worker could not
    start or crashed); individual unreadable files leave ``ok`` True and are
    embedded in ``text`` and listed in ``failed_files``.

    Attributes:
        ok: Whether the job as a whole succeeded.
        text: The compiled artifact (empty on failure).
        error: Job-level failure message (empty on success).
        file_count: Number of files included in the job.
        failed_files: Files rendered as inline error blocks.
    """
    ok: bool
    text: str = ""
    error: str = ""
    file_count: int = 0
    failed_files: List[FileReadFailure] = field(default_factory=list)


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(
        text: str,
        file_count: int,
        failed_files: Optional[List[FileReadFailure]] = None
) -> CompilationResult:
    return CompilationResult(
        ok=True,
        text=text,
        file_count=file_count,
        failed_files=list(failed_files or []),
    )


def create_error_result(error: str, file_count: int = 0) -> CompilationResult:
    """Build a job-level failure; no partial artifact is carried."""
    return CompilationResult(ok=False, text="", error=error, file_count=file_count)
