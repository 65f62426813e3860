from __future__ import annotations

"""
Directory Tree Data Models.

TreeNode is the immutable snapshot produced by the filesystem walk.
DisplayNode is the derived, annotated mirror consumed by the checkbox
tree; it is rebuilt wholesale from (tree, selection) and never mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


# -----------------------------------------------------------------------------
# SNAPSHOT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeNode:
    """
    Entry of the directory snapshot.

    Attributes:
        name: Base name of the entry.
        path: Absolute path; unique within a tree and used as the lookup key.
        kind: File or directory.
        children: Ordered child entries (always empty for files).
    """
    name: str
    path: str
    kind: NodeKind
    children: Tuple["TreeNode", ...] = ()

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    def iter_files(self) -> Iterator["TreeNode"]:
        """Yield every file node at or beneath this node."""
        if self.is_file:
            yield self
            return
        for child in self.children:
            yield from child.iter_files()


# -----------------------------------------------------------------------------
# DERIVED DISPLAY MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DisplayNode:
    """
    Annotated mirror of a TreeNode.

    Files only use ``is_selected``. Directories use ``has_files``,
    ``is_checked`` and ``is_indeterminate``; a directory without files
    anywhere beneath it renders no checkbox.
    """
    name: str
    path: str
    kind: NodeKind
    children: Tuple["DisplayNode", ...] = ()
    is_selected: bool = False
    has_files: bool = False
    is_checked: bool = False
    is_indeterminate: bool = False

    @property
    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def check_state(self) -> str:
        """Return "checked", "indeterminate" or "unchecked"."""
        if self.is_file:
            return "checked" if self.is_selected else "unchecked"
        if self.is_indeterminate:
            return "indeterminate"
        return "checked" if self.is_checked else "unchecked"
