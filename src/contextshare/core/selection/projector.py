from __future__ import annotations

"""
Display Projector.

Folds the immutable directory snapshot and the current selection into the
annotated DisplayNode tree rendered by the checkbox view.

Directory tri-state is computed post-order over *effective* children: a
file, or a directory that has at least one file somewhere beneath it.
Directories with no files are excluded from their parent's tally and never
render a checkbox, so an empty folder can never look fully checked.
"""

import logging
import threading
from typing import AbstractSet, List, Optional, Sequence, Tuple

from contextshare.domain.tree_models import DisplayNode, NodeKind, TreeNode

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PURE PROJECTION
# -----------------------------------------------------------------------------

def project(roots: Sequence[TreeNode], selection: AbstractSet[str]) -> List[DisplayNode]:
    """
    Project the snapshot into display nodes.

    Pure and deterministic: identical inputs always produce structurally
    identical output, and ``selection`` is only read.

    Args:
        roots: Top-level entries of the snapshot.
        selection: Selected file paths.

    Returns:
        List[DisplayNode]: Annotated mirror of ``roots``.
    """
    return [_project_node(node, selection) for node in roots]


def _project_node(node: TreeNode, selection: AbstractSet[str]) -> DisplayNode:
    if node.kind is NodeKind.FILE:
        return DisplayNode(
            name=node.name,
            path=node.path,
            kind=node.kind,
            is_selected=node.path in selection,
        )

    children = tuple(_project_node(child, selection) for child in node.children)

    effective_count = 0
    checked_count = 0
    partial_count = 0

    for child in children:
        if child.is_file:
            effective_count += 1
            if child.is_selected:
                checked_count += 1
        elif child.has_files:
            effective_count += 1
            if child.is_checked:
                checked_count += 1
            elif child.is_indeterminate:
                partial_count += 1

    is_checked, is_indeterminate = _tri_state(effective_count, checked_count, partial_count)

    return DisplayNode(
        name=node.name,
        path=node.path,
        kind=node.kind,
        children=children,
        has_files=effective_count > 0,
        is_checked=is_checked,
        is_indeterminate=is_indeterminate,
    )


def _tri_state(effective: int, checked: int, partial: int) -> Tuple[bool, bool]:
    """Return (is_checked, is_indeterminate) in priority order."""
    if effective == 0:
        return False, False
    if partial > 0:
        return False, True
    if checked == effective:
        return True, False
    if checked > 0:
        return False, True
    return False, False


# -----------------------------------------------------------------------------
# MEMOIZATION
# -----------------------------------------------------------------------------

class ProjectionCache:
    """
    Memoizes the last projection keyed on the selection version.

    The version is the sole invalidation signal: a read at an unchanged
    version returns the cached list without walking the tree again. Owners
    call :meth:`invalidate` when they swap the snapshot.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._version: Optional[int] = None
        self._value: List[DisplayNode] = []

    def get(
            self,
            roots: Sequence[TreeNode],
            selection: AbstractSet[str],
            version: int
    ) -> List[DisplayNode]:
        with self._lock:
            if self._version != version:
                self._value = project(roots, selection)
                self._version = version
                logger.debug(f"Projection rebuilt at selection version {version}")
            return list(self._value)

    def invalidate(self) -> None:
        with self._lock:
            self._version = None
            self._value = []
