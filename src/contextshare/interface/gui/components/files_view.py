from __future__ import annotations

"""
File Compiler View.

Folder picker, checkbox tree and compiled output panel. The tree is a
``ttk.Treeview`` whose item ids are absolute paths; checkbox state is drawn
as a glyph prefix and rebuilt from the projected display tree after every
selection change.
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Optional, Sequence, Set

import customtkinter as ctk

from contextshare.domain.tree_models import DisplayNode
from contextshare.utils.i18n import i18n

logger = logging.getLogger(__name__)

CHECK_GLYPHS = {
    "checked": "☑",
    "indeterminate": "◪",
    "unchecked": "☐",
}
DIR_ICON = "\U0001F4C1"
FILE_ICON = "\U0001F4C4"

PRIMARY_COLOR = "#1F6AA5"
ERROR_COLOR = "#E04F5F"


class FilesFrame(ctk.CTkFrame):
    """
    Main workspace: tree on the left, compiled text on the right.

    Widgets are exposed as attributes so the controller can bind commands
    and toggle their state.
    """

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)

        self.on_toggle: Optional[Callable[[str], None]] = None

        self.grid_columnconfigure(0, weight=2)
        self.grid_columnconfigure(1, weight=3)
        self.grid_rowconfigure(1, weight=1)

        self._build_header()
        self._build_tree_panel()
        self._build_output_panel()

    # -------------------------------------------------------------------------
    # LAYOUT
    # -------------------------------------------------------------------------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, columnspan=2, sticky="ew", pady=(0, 10))
        header.grid_columnconfigure(1, weight=1)

        self.btn_folder = ctk.CTkButton(header, text=i18n.t("gui.buttons.select_folder"))
        self.btn_folder.grid(row=0, column=0, padx=(0, 10))

        self.lbl_folder = ctk.CTkLabel(header, text=i18n.t("gui.labels.no_folder"), anchor="w")
        self.lbl_folder.grid(row=0, column=1, sticky="ew")

    def _build_tree_panel(self) -> None:
        panel = ctk.CTkFrame(self)
        panel.grid(row=1, column=0, sticky="nsew", padx=(0, 10))
        panel.grid_columnconfigure(0, weight=1)
        panel.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(
            panel, text=i18n.t("gui.labels.files"), font=ctk.CTkFont(weight="bold")
        ).grid(row=0, column=0, sticky="w", padx=10, pady=(10, 5))

        tree_box = tk.Frame(panel)
        tree_box.grid(row=1, column=0, sticky="nsew", padx=10)
        tree_box.grid_columnconfigure(0, weight=1)
        tree_box.grid_rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(tree_box, show="tree", selectmode="browse")
        self.tree.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(tree_box, orient="vertical", command=self.tree.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self.tree.configure(yscrollcommand=scroll.set)
        self.tree.bind("<Button-1>", self._on_click)
        self.tree.bind("<space>", self._on_space)

        self.lbl_count = ctk.CTkLabel(panel, text=i18n.t("gui.labels.file_count", count=0))
        self.lbl_count.grid(row=2, column=0, sticky="w", padx=10, pady=5)

        self.btn_compile = ctk.CTkButton(
            panel,
            text=i18n.t("gui.buttons.compile"),
            height=40,
            font=ctk.CTkFont(size=14, weight="bold"),
            fg_color=PRIMARY_COLOR,
            state="disabled"
        )
        self.btn_compile.grid(row=3, column=0, sticky="ew", padx=10, pady=(0, 10))

    def _build_output_panel(self) -> None:
        panel = ctk.CTkFrame(self)
        panel.grid(row=1, column=1, sticky="nsew")
        panel.grid_columnconfigure(0, weight=1)
        panel.grid_rowconfigure(2, weight=1)

        ctk.CTkLabel(
            panel, text=i18n.t("gui.labels.output"), font=ctk.CTkFont(weight="bold")
        ).grid(row=0, column=0, sticky="w", padx=10, pady=(10, 5))

        self.lbl_error = ctk.CTkLabel(panel, text="", text_color=ERROR_COLOR, anchor="w", wraplength=520)
        self.lbl_error.grid(row=1, column=0, sticky="ew", padx=10)

        self.txt_output = ctk.CTkTextbox(panel, font=("Consolas", 11), wrap="none")
        self.txt_output.grid(row=2, column=0, sticky="nsew", padx=10)

        actions = ctk.CTkFrame(panel, fg_color="transparent")
        actions.grid(row=3, column=0, sticky="ew", padx=10, pady=10)
        actions.grid_columnconfigure(0, weight=1)

        self.lbl_tokens = ctk.CTkLabel(actions, text="", text_color="gray")
        self.lbl_tokens.grid(row=0, column=0, sticky="w")

        self.btn_copy = ctk.CTkButton(actions, text=i18n.t("gui.buttons.copy"), width=140, state="disabled")
        self.btn_copy.grid(row=0, column=1, padx=(0, 10))

        self.btn_save = ctk.CTkButton(actions, text=i18n.t("gui.buttons.save"), width=140, state="disabled")
        self.btn_save.grid(row=0, column=2)

    # -------------------------------------------------------------------------
    # TREE RENDERING
    # -------------------------------------------------------------------------

    def render_tree(self, nodes: Sequence[DisplayNode]) -> None:
        """
        Rebuild the tree widget from display nodes, keeping expanded folders
        expanded and the scroll position in place.
        """
        opened = self._opened_items()
        y_view = self.tree.yview()[0]

        self.tree.delete(*self.tree.get_children(""))
        for node in nodes:
            self._insert(node, "", opened)

        self.tree.yview_moveto(y_view)

    def _insert(self, node: DisplayNode, parent: str, opened: Set[str]) -> None:
        self.tree.insert(
            parent,
            "end",
            iid=node.path,
            text=self._label(node),
            open=node.path in opened,
        )
        for child in node.children:
            self._insert(child, node.path, opened)

    def _opened_items(self) -> Set[str]:
        opened: Set[str] = set()
        stack = list(self.tree.get_children(""))
        while stack:
            item = stack.pop()
            if self.tree.item(item, "open"):
                opened.add(item)
            stack.extend(self.tree.get_children(item))
        return opened

    @staticmethod
    def _label(node: DisplayNode) -> str:
        if node.is_dir:
            glyph = CHECK_GLYPHS[node.check_state] if node.has_files else " "
            return f"{glyph} {DIR_ICON} {node.name}"
        return f"{CHECK_GLYPHS[node.check_state]} {FILE_ICON} {node.name}"

    def clear_tree(self) -> None:
        self.tree.delete(*self.tree.get_children(""))

    # -------------------------------------------------------------------------
    # EVENTS
    # -------------------------------------------------------------------------

    def _on_click(self, event: Any) -> Optional[str]:
        item = self.tree.identify_row(event.y)
        if not item:
            return None
        # Expand arrow keeps its default behavior
        if "indicator" in self.tree.identify_element(event.x, event.y):
            return None
        if self.on_toggle:
            self.on_toggle(item)
        return "break"

    def _on_space(self, _event: Any) -> Optional[str]:
        item = self.tree.focus()
        if item and self.on_toggle:
            self.on_toggle(item)
            return "break"
        return None

    # -------------------------------------------------------------------------
    # PUBLIC UPDATE METHODS (Called by Controllers)
    # -------------------------------------------------------------------------

    def set_folder_label(self, path: str) -> None:
        text = i18n.t("gui.labels.selected_folder", path=path) if path else i18n.t("gui.labels.no_folder")
        self.lbl_folder.configure(text=text)

    def set_file_count(self, count: int, total: int) -> None:
        self.lbl_count.configure(text=i18n.t("gui.labels.file_count", count=count, total=total))

    def set_output(self, text: str) -> None:
        self.txt_output.configure(state="normal")
        self.txt_output.delete("1.0", "end")
        if text:
            self.txt_output.insert("1.0", text)
        self.txt_output.configure(state="disabled")

    def set_error(self, message: str) -> None:
        self.lbl_error.configure(text=message)

    def set_tokens(self, count: Optional[int]) -> None:
        self.lbl_tokens.configure(text="" if count is None else i18n.t("gui.labels.tokens", count=f"{count:,}"))

    def set_output_actions(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self.btn_copy.configure(state=state)
        self.btn_save.configure(state=state)
