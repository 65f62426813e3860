from __future__ import annotations

"""
Selection Controller.

Sole writer of the selection state. Exposes the two user actions of the
checkbox tree (toggle a file, toggle a directory) plus tree replacement,
and keeps the invariant that every selected path is a file of the current
snapshot.
"""

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from contextshare.core.selection.projector import ProjectionCache
from contextshare.core.selection.state import SelectionState
from contextshare.domain.tree_models import DisplayNode, TreeNode

logger = logging.getLogger(__name__)


class SelectionController:
    """
    Owns the current snapshot, its file index and the selection state.

    Each public mutation bumps the selection version exactly once, so the
    projection is recomputed at most once per user action.
    """

    def __init__(self, roots: Sequence[TreeNode] = ()) -> None:
        self._state = SelectionState()
        self._cache = ProjectionCache()
        self._roots: Tuple[TreeNode, ...] = ()
        self._files: Dict[str, TreeNode] = {}
        self._nodes: Dict[str, TreeNode] = {}
        self.set_tree(roots)

    # -------------------------------------------------------------------------
    # READ API
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> Tuple[TreeNode, ...]:
        return self._roots

    @property
    def version(self) -> int:
        return self._state.version

    @property
    def selected_count(self) -> int:
        return len(self._state)

    def is_selected(self, path: str) -> bool:
        return path in self._state

    def is_file(self, path: str) -> bool:
        return path in self._files

    def node(self, path: str) -> Optional[TreeNode]:
        """Look up any node of the current snapshot by path."""
        return self._nodes.get(path)

    def selected_paths(self) -> List[str]:
        """Return the selected file paths sorted lexicographically."""
        return sorted(self._state.snapshot())

    def snapshot(self) -> FrozenSet[str]:
        return self._state.snapshot()

    def display_tree(self) -> List[DisplayNode]:
        """Return the projection at the current selection version."""
        return self._cache.get(self._roots, self._state.paths, self._state.version)

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def set_tree(self, roots: Sequence[TreeNode]) -> None:
        """
        Replace the snapshot and drop every selection from the previous one.
        """
        self._roots = tuple(roots)
        self._files = {}
        self._nodes = {}
        for node in self._roots:
            self._index(node)
        self._state.clear()
        self._cache.invalidate()
        logger.debug(f"Selection tree replaced: {len(self._files)} files indexed")

    def reset(self) -> None:
        """Clear the snapshot and the selection."""
        self.set_tree(())

    def toggle_file(self, path: str, selected: bool) -> int:
        """
        Select or deselect a single file.

        A path that is not a file of the current snapshot is ignored (the
        version still advances so the call remains one coalesced update).

        Args:
            path: Absolute file path.
            selected: Desired state.

        Returns:
            int: The new selection version.
        """
        if path not in self._files:
            logger.debug(f"toggle_file ignored for unknown or non-file path: {path}")
            return self._state.apply((), selected)
        return self._state.apply((path,), selected)

    def toggle_directory(self, node: TreeNode, selected: bool) -> int:
        """
        Apply ``selected`` to every file beneath ``node``.

        The directory state is absolute: prior partial selection inside the
        directory is overwritten, not merged.

        Args:
            node: Directory (or file) node of the current snapshot.
            selected: Desired state for all descendant files.

        Returns:
            int: The new selection version.
        """
        paths = [f.path for f in node.iter_files() if f.path in self._files]
        logger.debug(f"toggle_directory {node.path} -> {selected} ({len(paths)} files)")
        return self._state.apply(paths, selected)

    def _index(self, node: TreeNode) -> None:
        self._nodes[node.path] = node
        if node.is_file:
            self._files[node.path] = node
        for child in node.children:
            self._index(child)

    def select_all(self, selected: bool = True) -> int:
        return self._state.apply(list(self._files), selected)
