from __future__ import annotations

"""
Diagnostics Console.

Read-only log view fed from the GUI log queue.
"""

from typing import Any

import customtkinter as ctk

from contextshare.utils.i18n import i18n

MAX_CONSOLE_LINES = 2000


class LogsFrame(ctk.CTkFrame):
    """
    Monospaced console showing the log records of the current session.
    """

    def __init__(self, master: Any, **kwargs: Any):
        super().__init__(master, corner_radius=10, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.textbox = ctk.CTkTextbox(self, state="disabled", font=("Consolas", 10))
        self.textbox.grid(row=0, column=0, sticky="nsew")

        self.btn_copy = ctk.CTkButton(
            self,
            text=i18n.t("gui.buttons.copy_logs"),
            command=self._copy_logs
        )
        self.btn_copy.grid(row=1, column=0, pady=10, sticky="e")

    def append_log(self, msg: str) -> None:
        """
        Append one formatted record, trimming the oldest lines past the cap.
        """
        self.textbox.configure(state="normal")
        self.textbox.insert("end", msg + "\n")
        line_count = int(self.textbox.index("end-1c").split(".")[0])
        if line_count > MAX_CONSOLE_LINES:
            self.textbox.delete("1.0", f"{line_count - MAX_CONSOLE_LINES}.0")
        self.textbox.see("end")
        self.textbox.configure(state="disabled")

    def _copy_logs(self) -> None:
        self.clipboard_clear()
        self.clipboard_append(self.textbox.get("1.0", "end"))
