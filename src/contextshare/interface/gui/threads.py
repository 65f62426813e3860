from __future__ import annotations

"""
Background Worker Threads for GUI Operations.

Folder snapshots run off the Tk thread so large trees do not freeze the
window. Results go back through a callback; the controller marshals them
onto the Tk loop with ``app.after``.
"""

import logging
import threading
from typing import Any, Callable, List

from contextshare.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)


def run_listing_task(
        lister: Callable[[str], List[TreeNode]],
        folder: str,
        on_complete: Callable[[str, Any], None],
) -> None:
    """
    Snapshot ``folder`` and report either the node list or the exception.

    Args:
        lister: Directory snapshot function.
        folder: Folder chosen by the user.
        on_complete: Receives ``(folder, nodes_or_exception)``.
    """
    try:
        nodes = lister(folder)
    except Exception as e:
        logger.error(f"Listing Thread: Failed to read folder {folder}: {e}")
        on_complete(folder, e)
        return
    on_complete(folder, nodes)


def start_listing(
        lister: Callable[[str], List[TreeNode]],
        folder: str,
        on_complete: Callable[[str, Any], None],
) -> threading.Thread:
    thread = threading.Thread(
        target=run_listing_task,
        args=(lister, folder, on_complete),
        name="FolderListing",
        daemon=True,
    )
    thread.start()
    return thread
