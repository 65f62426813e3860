from __future__ import annotations

"""
Main Application Controller.

Bridges the views and the compile session. Handles folder selection,
checkbox toggles and output actions, and delegates compilation and the
prompt library to sub-controllers.
"""

import logging
import os
import tkinter as tk
import tkinter.messagebox as mb
from typing import Any, Dict, List, Optional

import customtkinter as ctk

from contextshare.core.services.prompts import PromptStore
from contextshare.core.services.session import CompileSession
from contextshare.domain import config as cfg
from contextshare.domain.tree_models import TreeNode
from contextshare.infra.fs import write_text_file
from contextshare.interface.gui import threads
from contextshare.interface.gui.controllers.execution_controller import ExecutionController
from contextshare.interface.gui.controllers.prompts_controller import PromptsController
from contextshare.utils.i18n import i18n

logger = logging.getLogger(__name__)

FEEDBACK_RESET_MS = 1500


class AppController:
    """
    Central controller of the GUI.

    Args:
        app: Root CustomTkinter application instance.
        config: Active session configuration dictionary.
        app_state: Global persistent application state.
        session: Compile session (built from ``config`` when omitted).
        prompt_store: Prompt library (default location when omitted).
    """

    def __init__(
            self,
            app: ctk.CTk,
            config: Dict[str, Any],
            app_state: Dict[str, Any],
            session: Optional[CompileSession] = None,
            prompt_store: Optional[PromptStore] = None,
    ):
        self.app = app
        self.config = config
        self.app_state = app_state
        self.session = session or CompileSession(config)
        self.prompt_store = prompt_store or PromptStore(cfg.PROMPTS_FILE)

        self.files_view: Any = None
        self.prompts_view: Any = None
        self.logs_view: Any = None
        self.sidebar_view: Any = None

        self._listing_id = 0

        self.execution_controller = ExecutionController(self)
        self.prompts_controller = PromptsController(self)

    # -------------------------------------------------------------------------
    # VIEW REGISTRATION
    # -------------------------------------------------------------------------

    def register_views(self, files: Any, prompts: Any, logs: Any, sidebar: Any) -> None:
        self.files_view = files
        self.prompts_view = prompts
        self.logs_view = logs
        self.sidebar_view = sidebar

        files.on_toggle = self.on_toggle
        files.btn_folder.configure(command=self.browse_folder)
        files.btn_compile.configure(command=self.execution_controller.start_compile)
        files.btn_copy.configure(command=self.copy_output)
        files.btn_save.configure(command=self.save_output)

        self.prompts_controller.bind(prompts)

    # -------------------------------------------------------------------------
    # FOLDER LIFECYCLE
    # -------------------------------------------------------------------------

    def browse_folder(self) -> None:
        initial = self.config.get("last_folder") or None
        path = ctk.filedialog.askdirectory(parent=self.app, title=i18n.t("gui.buttons.select_folder"),
                                           initialdir=initial)
        if path:
            self.open_folder(path)

    def open_folder(self, path: str) -> None:
        """
        Clear the current session and snapshot ``path`` in the background.
        """
        self.session.reset()
        self._listing_id += 1
        listing_id = self._listing_id
        self.execution_controller.reset_output()
        self.files_view.clear_tree()
        self.files_view.btn_folder.configure(text=i18n.t("gui.buttons.loading_folder"), state="disabled")
        self.refresh_selection_widgets()

        threads.start_listing(
            self.session.lister,
            path,
            lambda folder, payload: self._handle_listing_callback(listing_id, folder, payload),
        )

    def _handle_listing_callback(self, listing_id: int, folder: str, payload: Any) -> None:
        self.app.after(0, lambda: self._apply_listing(listing_id, folder, payload))

    def _apply_listing(self, listing_id: int, folder: str, payload: Any) -> None:
        # Only the most recent open_folder call may install its snapshot
        if listing_id != self._listing_id:
            logger.debug(f"Discarding stale folder listing for {folder}")
            return

        self.files_view.btn_folder.configure(text=i18n.t("gui.buttons.change_folder"), state="normal")

        if isinstance(payload, Exception):
            self.files_view.set_folder_label("")
            mb.showerror(i18n.t("gui.dialogs.error_title"),
                         i18n.t("gui.dialogs.folder_failed", error=str(payload)))
            return

        roots: List[TreeNode] = payload
        self.session.load_tree(folder, roots)
        self.config["last_folder"] = self.session.root
        self.files_view.set_folder_label(self.session.root)
        self.refresh_tree()

    # -------------------------------------------------------------------------
    # SELECTION
    # -------------------------------------------------------------------------

    def on_toggle(self, path: str) -> None:
        """
        Flip the checkbox of the clicked tree item.

        Files flip their own state. Directories become fully checked unless
        they already are, matching a native tri-state checkbox.
        """
        node = self.session.selection.node(path)
        if node is None:
            return

        if node.is_file:
            self.session.toggle_file(path, not self.session.selection.is_selected(path))
        else:
            display = self._find_display(path)
            if display is None or not display.has_files:
                return
            self.session.toggle_directory(node, not display.is_checked)

        self.refresh_tree()

    def _find_display(self, path: str) -> Any:
        stack = list(self.session.display_tree())
        while stack:
            item = stack.pop()
            if item.path == path:
                return item
            stack.extend(item.children)
        return None

    def refresh_tree(self) -> None:
        self.files_view.render_tree(self.session.display_tree())
        self.refresh_selection_widgets()

    def refresh_selection_widgets(self) -> None:
        self.files_view.set_file_count(self.session.selected_count, self.session.total_files)
        self.files_view.btn_compile.configure(state="normal" if self.session.can_compile else "disabled")

    # -------------------------------------------------------------------------
    # OUTPUT ACTIONS
    # -------------------------------------------------------------------------

    def copy_output(self) -> None:
        text = self.execution_controller.output_text
        if not text:
            return
        try:
            self.app.clipboard_clear()
            self.app.clipboard_append(text)
        except tk.TclError as e:
            logger.error(f"Clipboard copy failed: {e}")
            mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.copy_failed", error=str(e)))
            return
        self._flash(self.files_view.btn_copy, i18n.t("gui.buttons.copied"), i18n.t("gui.buttons.copy"))

    def save_output(self) -> None:
        text = self.execution_controller.output_text
        if not text:
            return
        path = ctk.filedialog.asksaveasfilename(
            parent=self.app,
            defaultextension=".txt",
            initialfile="compiled_output.txt",
            filetypes=[("Text Files", "*.txt"), ("All Files", "*.*")],
        )
        if not path:
            return
        try:
            saved = write_text_file(path, text)
        except OSError as e:
            logger.error(f"Failed to save compiled output: {e}")
            mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.save_failed", error=str(e)))
            return
        logger.info(f"Compiled output saved to {saved}")
        self._flash(self.files_view.btn_save, i18n.t("gui.buttons.saved"), i18n.t("gui.buttons.save"))

    def _flash(self, button: Any, text: str, restore: str) -> None:
        button.configure(text=text)
        self.app.after(FEEDBACK_RESET_MS, lambda: button.configure(text=restore))

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def restore_last_folder(self) -> None:
        folder = self.config.get("last_folder", "")
        if folder and os.path.isdir(folder):
            self.open_folder(folder)

    def persist_state(self) -> None:
        self.app_state["last_session"] = self.config
        cfg.save_app_state(self.app_state)
