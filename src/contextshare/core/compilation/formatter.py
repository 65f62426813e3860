from __future__ import annotations

"""
Compiled Artifact Formatter.

Renders per-file blocks of the artifact:

    "<relative/path>"
    <blank>
    <blank>
    <content>
    ******** END OF FILE **********
    <blank>

and, for unreadable files:

    // Error reading file: <relative/path>
    // <error message>
    <blank>
"""

import os
from typing import Iterable

from contextshare.domain import constants as const
from contextshare.domain.compilation_models import FileReadOutcome


def relative_display_path(file_path: str, root: str) -> str:
    """
    Express ``file_path`` relative to ``root`` with forward slashes.

    Falls back to the absolute path when the two live on different drives.
    """
    try:
        rel = os.path.relpath(file_path, root)
    except ValueError:
        rel = file_path
    return rel.replace("\\", "/").lstrip("/")


def render_file_block(rel_path: str, content: str) -> str:
    return f'"{rel_path}"\n\n\n{content}\n{const.END_OF_FILE_MARKER}\n\n'


def render_error_block(rel_path: str, error: str) -> str:
    return f"{const.ERROR_HEADER_PREFIX}{rel_path}\n{const.ERROR_LINE_PREFIX}{error}\n\n"


def render_outcome(outcome: FileReadOutcome, root: str) -> str:
    rel_path = relative_display_path(outcome.file_path, root)
    if outcome.content is not None:
        return render_file_block(rel_path, outcome.content)
    return render_error_block(rel_path, outcome.error or "Failed to read file")


def render_artifact(outcomes: Iterable[FileReadOutcome], root: str) -> str:
    """Concatenate the blocks of ``outcomes`` in the order given."""
    return "".join(render_outcome(o, root) for o in outcomes)
