from __future__ import annotations

"""
Main Application Window Factory.

Creates the root CustomTkinter window with a sidebar column and a content
column.
"""

import customtkinter as ctk

from contextshare.domain import constants as const
from contextshare.utils.i18n import i18n


def create_main_window(theme: str = "System") -> ctk.CTk:
    """
    Instantiate and configure the primary application window.

    Args:
        theme: CustomTkinter appearance mode ("System", "Light", "Dark").

    Returns:
        ctk.CTk: The configured root application instance.
    """
    ctk.set_appearance_mode(theme)
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title(f"{i18n.t('app.title')} - v{const.CURRENT_CONFIG_VERSION}")
    app.geometry("1200x760")
    app.minsize(900, 560)

    # Column 0 (Sidebar), Column 1 (Content)
    app.grid_columnconfigure(1, weight=1)
    app.grid_rowconfigure(0, weight=1)

    return app
