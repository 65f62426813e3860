from __future__ import annotations

"""
Directory Snapshot Service.

Walks a folder once and returns the immutable TreeNode hierarchy the
selection engine works on. Entries are ordered directories first, then
files, each group by case-insensitive name.
"""

import logging
import os
from typing import List, Sequence

from contextshare.domain.tree_models import NodeKind, TreeNode

logger = logging.getLogger(__name__)


def list_tree(root_path: str) -> List[TreeNode]:
    """
    Snapshot the contents of ``root_path``.

    Symbolic links to directories are listed as empty directories and never
    descended into. Subdirectories that cannot be read are kept as empty
    directories and logged; only a failure on the root itself is raised.

    Args:
        root_path: Folder chosen by the user.

    Returns:
        List[TreeNode]: Top-level entries of the folder.

    Raises:
        NotADirectoryError: If ``root_path`` is not a directory.
        OSError: If the root cannot be listed.
    """
    root_abs = os.path.abspath(root_path)
    if not os.path.isdir(root_abs):
        raise NotADirectoryError(f"Not a directory: {root_abs}")

    nodes = _scan_dir(root_abs)
    logger.info(f"Directory snapshot ready for {root_abs} ({len(nodes)} top-level entries)")
    return nodes


def _scan_dir(dir_path: str) -> List[TreeNode]:
    with os.scandir(dir_path) as it:
        entries = sorted(it, key=lambda e: (not (_is_real_dir(e) or _is_linked_dir(e)), e.name.lower(), e.name))

    nodes: List[TreeNode] = []
    for entry in entries:
        if _is_linked_dir(entry):
            nodes.append(TreeNode(name=entry.name, path=entry.path, kind=NodeKind.DIRECTORY))
        elif _is_real_dir(entry):
            try:
                children = _scan_dir(entry.path)
            except OSError as e:
                logger.warning(f"Cannot list directory {entry.path}: {e}")
                children = []
            nodes.append(TreeNode(
                name=entry.name,
                path=entry.path,
                kind=NodeKind.DIRECTORY,
                children=tuple(children),
            ))
        else:
            nodes.append(TreeNode(name=entry.name, path=entry.path, kind=NodeKind.FILE))
    return nodes


def _is_real_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def _is_linked_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_symlink() and entry.is_dir()
    except OSError:
        return False


def count_files(nodes: Sequence[TreeNode]) -> int:
    return sum(1 for node in nodes for _ in node.iter_files())
