from __future__ import annotations

"""
Prompts Manager View.

List of saved prompts on the left and an editor on the right.
"""

from typing import Any, Callable, Dict, Optional, Sequence

import customtkinter as ctk

from contextshare.domain.prompt_models import Prompt
from contextshare.utils.i18n import i18n

SELECTED_COLOR = ("gray75", "gray25")


class PromptsFrame(ctk.CTkFrame):
    """
    Editor for the saved prompt library.
    """

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)

        self.on_select: Optional[Callable[[str], None]] = None
        self._item_buttons: Dict[str, ctk.CTkButton] = {}

        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=3)
        self.grid_rowconfigure(0, weight=1)

        # --- List ---
        left = ctk.CTkFrame(self)
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 10))
        left.grid_columnconfigure(0, weight=1)
        left.grid_rowconfigure(0, weight=1)

        self.list_frame = ctk.CTkScrollableFrame(left, fg_color="transparent")
        self.list_frame.grid(row=0, column=0, sticky="nsew", padx=5, pady=5)
        self.list_frame.grid_columnconfigure(0, weight=1)

        self.btn_new = ctk.CTkButton(left, text=i18n.t("gui.buttons.new_prompt"))
        self.btn_new.grid(row=1, column=0, sticky="ew", padx=10, pady=10)

        # --- Editor ---
        right = ctk.CTkFrame(self)
        right.grid(row=0, column=1, sticky="nsew")
        right.grid_columnconfigure(0, weight=1)
        right.grid_rowconfigure(3, weight=1)

        ctk.CTkLabel(right, text=i18n.t("gui.labels.prompt_name")).grid(
            row=0, column=0, sticky="w", padx=10, pady=(10, 0))
        self.entry_name = ctk.CTkEntry(right)
        self.entry_name.grid(row=1, column=0, sticky="ew", padx=10, pady=5)

        ctk.CTkLabel(right, text=i18n.t("gui.labels.prompt_content")).grid(
            row=2, column=0, sticky="w", padx=10)
        self.txt_content = ctk.CTkTextbox(right, wrap="word")
        self.txt_content.grid(row=3, column=0, sticky="nsew", padx=10, pady=5)

        actions = ctk.CTkFrame(right, fg_color="transparent")
        actions.grid(row=4, column=0, sticky="e", padx=10, pady=10)

        self.btn_copy = ctk.CTkButton(actions, text=i18n.t("gui.buttons.copy_prompt"), width=120)
        self.btn_copy.grid(row=0, column=0, padx=(0, 10))
        self.btn_delete = ctk.CTkButton(
            actions, text=i18n.t("gui.buttons.delete_prompt"), width=100,
            fg_color="#E04F5F", hover_color="#A03541"
        )
        self.btn_delete.grid(row=0, column=1, padx=(0, 10))
        self.btn_save = ctk.CTkButton(actions, text=i18n.t("gui.buttons.save_prompt"), width=120)
        self.btn_save.grid(row=0, column=2)

    def render_list(self, prompts: Sequence[Prompt], selected_id: Optional[str] = None) -> None:
        """Rebuild the prompt list, highlighting ``selected_id``."""
        for btn in self._item_buttons.values():
            btn.destroy()
        self._item_buttons = {}

        for row, prompt in enumerate(prompts):
            btn = ctk.CTkButton(
                self.list_frame,
                text=prompt.name,
                anchor="w",
                fg_color=SELECTED_COLOR if prompt.id == selected_id else "transparent",
                text_color=("gray10", "#DCE4EE"),
                command=lambda pid=prompt.id: self.on_select and self.on_select(pid),
            )
            btn.grid(row=row, column=0, sticky="ew", pady=2)
            self._item_buttons[prompt.id] = btn

        self.btn_delete.configure(state="normal" if selected_id else "disabled")

    def get_form(self) -> Dict[str, str]:
        return {
            "name": self.entry_name.get(),
            "content": self.txt_content.get("1.0", "end-1c"),
        }

    def set_form(self, name: str = "", content: str = "") -> None:
        self.entry_name.delete(0, "end")
        self.entry_name.insert(0, name)
        self.txt_content.delete("1.0", "end")
        self.txt_content.insert("1.0", content)
