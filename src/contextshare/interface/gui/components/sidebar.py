from __future__ import annotations

"""
Sidebar Navigation Component.

Persistent left panel with branding and the view switch buttons.
"""

from typing import Any, Callable, Dict

import customtkinter as ctk

from contextshare.domain import constants as const
from contextshare.utils.i18n import i18n

VIEW_FILES = "files"
VIEW_PROMPTS = "prompts"
VIEW_LOGS = "logs"


class SidebarFrame(ctk.CTkFrame):
    """
    Application navigation sidebar.
    """

    def __init__(self, master: Any, nav_callback: Callable[[str], None], **kwargs: Any):
        super().__init__(master, width=200, corner_radius=0, **kwargs)

        self.nav_callback = nav_callback

        self.logo_label = ctk.CTkLabel(
            self,
            text=i18n.t("app.title"),
            font=ctk.CTkFont(size=20, weight="bold")
        )
        self.logo_label.grid(row=0, column=0, padx=20, pady=(20, 10))

        self.version_label = ctk.CTkLabel(
            self,
            text=f"v{const.CURRENT_CONFIG_VERSION}",
            font=ctk.CTkFont(size=10),
            text_color="gray"
        )
        self.version_label.grid(row=1, column=0, padx=20, pady=(0, 20))

        self.nav_buttons: Dict[str, ctk.CTkButton] = {}
        for row, name in enumerate((VIEW_FILES, VIEW_PROMPTS, VIEW_LOGS), start=2):
            btn = ctk.CTkButton(
                self,
                text=i18n.t(f"gui.views.{name}"),
                command=lambda n=name: self.nav_callback(n),
                fg_color="transparent",
                border_width=2,
                text_color=("gray10", "#DCE4EE")
            )
            btn.grid(row=row, column=0, padx=20, pady=10)
            self.nav_buttons[name] = btn

        self.grid_rowconfigure(5, weight=1)

    def set_active(self, name: str) -> None:
        """Highlight the button of the visible view."""
        for key, btn in self.nav_buttons.items():
            btn.configure(fg_color=("gray75", "gray25") if key == name else "transparent")
