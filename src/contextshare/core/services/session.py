from __future__ import annotations

"""
Compile Session Facade.

Binds a chosen folder, its directory snapshot, the selection controller and
the compile dispatcher into the single object the CLI and GUI talk to.

Compile replies are tagged with a ticket. Changing folder or resetting the
session retires the current ticket, so a reply that arrives afterwards is
recognized as stale and dropped by the caller.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from contextshare.core.compilation.dispatch import (
    CompileDispatcher,
    CompileRequest,
    executor_factory_for,
)
from contextshare.core.selection.controller import SelectionController
from contextshare.core.services.scanner import count_files, list_tree
from contextshare.domain.compilation_models import CompilationResult
from contextshare.domain.config import get_default_config
from contextshare.domain.tree_models import DisplayNode, TreeNode
from contextshare.infra.fs import normalize_path

logger = logging.getLogger(__name__)

TreeLister = Callable[[str], List[TreeNode]]
CompileCallback = Callable[[int, CompilationResult], None]


class CompileSession:
    """
    Interactive session state for one window (or one CLI run).

    Args:
        config: Validated session configuration.
        dispatcher: Compile dispatcher; built from ``config["worker_mode"]``
            when omitted.
        lister: Directory snapshot function.
    """

    def __init__(
            self,
            config: Optional[Dict[str, Any]] = None,
            dispatcher: Optional[CompileDispatcher] = None,
            lister: TreeLister = list_tree,
    ) -> None:
        self.config: Dict[str, Any] = dict(config or get_default_config())
        self.selection = SelectionController()
        self._dispatcher = dispatcher or CompileDispatcher(
            executor_factory_for(self.config.get("worker_mode", ""))
        )
        self._lister = lister
        self._root: str = ""
        self._total_files = 0
        self._ticket_lock = threading.Lock()
        self._ticket = 0

    # -------------------------------------------------------------------------
    # FOLDER LIFECYCLE
    # -------------------------------------------------------------------------

    @property
    def root(self) -> str:
        return self._root

    @property
    def has_folder(self) -> bool:
        return bool(self._root)

    def open_folder(self, folder: str) -> List[TreeNode]:
        """
        Snapshot ``folder`` and make it the session root.

        The previous tree and selection are discarded before listing, so a
        failed listing leaves an empty session rather than stale state.

        Raises:
            OSError: If the folder cannot be listed.
        """
        self.reset()
        path = normalize_path(folder)
        roots = self._lister(path)
        self.load_tree(path, roots)
        return roots

    def load_tree(self, folder: str, roots: Sequence[TreeNode]) -> None:
        """
        Install a snapshot listed elsewhere (e.g. on a background thread).
        """
        self.reset()
        self._root = normalize_path(folder)
        self.selection.set_tree(roots)
        self._total_files = count_files(roots)
        self.config["last_folder"] = self._root
        logger.info(f"Folder opened: {self._root} ({self._total_files} files)")

    @property
    def lister(self) -> TreeLister:
        return self._lister

    def reset(self) -> None:
        """Drop folder, tree and selection; retire any pending compile."""
        self._root = ""
        self._total_files = 0
        self.selection.reset()
        self._retire_ticket()

    # -------------------------------------------------------------------------
    # SELECTION FACADE
    # -------------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self.selection.version

    @property
    def selected_count(self) -> int:
        return self.selection.selected_count

    @property
    def total_files(self) -> int:
        return self._total_files

    def display_tree(self) -> List[DisplayNode]:
        return self.selection.display_tree()

    def toggle_file(self, path: str, selected: bool) -> int:
        return self.selection.toggle_file(path, selected)

    def toggle_directory(self, node: TreeNode, selected: bool) -> int:
        return self.selection.toggle_directory(node, selected)

    def toggle_path(self, path: str, selected: bool) -> int:
        """Toggle whichever kind of node ``path`` names."""
        node = self.selection.node(path)
        if node is not None and node.is_dir:
            return self.toggle_directory(node, selected)
        return self.toggle_file(path, selected)

    # -------------------------------------------------------------------------
    # COMPILATION
    # -------------------------------------------------------------------------

    @property
    def can_compile(self) -> bool:
        return self.has_folder and self.selected_count > 0 and not self._dispatcher.busy

    @property
    def is_compiling(self) -> bool:
        return self._dispatcher.busy

    def build_request(self, paths: Optional[Sequence[str]] = None) -> CompileRequest:
        return CompileRequest.build(
            self.selection.selected_paths() if paths is None else sorted(paths),
            self._root,
            max_workers=int(self.config.get("max_read_workers", 8)),
            encoding=str(self.config.get("encoding", "utf-8")),
            errors=str(self.config.get("encoding_errors", "strict")),
        )

    def compile(self) -> CompilationResult:
        """
        Compile the current selection and wait for the result.

        Raises:
            ValueError: If no folder is open or nothing is selected.
            RuntimeError: If a compile is already running.
        """
        return self._dispatcher.run(self.build_request())

    def compile_async(self, on_complete: CompileCallback) -> int:
        """
        Start a background compile of the current selection.

        ``on_complete(ticket, result)`` is invoked from the worker thread.
        Callers compare the ticket with :meth:`is_current` before applying
        the result.

        Returns:
            int: The ticket of the submitted job.

        Raises:
            ValueError: If no folder is open or nothing is selected.
            RuntimeError: If a compile is already running.
        """
        issued: List[int] = []

        def _issue_ticket() -> None:
            with self._ticket_lock:
                self._ticket += 1
                issued.append(self._ticket)

        # Issued on admission; a refused submit keeps the in-flight ticket current
        self._dispatcher.submit(
            self.build_request(),
            lambda result: on_complete(issued[0], result),
            on_admitted=_issue_ticket,
        )
        ticket = issued[0]
        logger.debug(f"Compile job submitted with ticket {ticket}")
        return ticket

    def is_current(self, ticket: int) -> bool:
        with self._ticket_lock:
            return ticket == self._ticket

    def _retire_ticket(self) -> None:
        with self._ticket_lock:
            self._ticket += 1
