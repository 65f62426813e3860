from __future__ import annotations

import logging
import tkinter.messagebox as mb
from typing import TYPE_CHECKING, Optional

from contextshare.core.processing.tokenizer import count_tokens
from contextshare.domain import constants as const
from contextshare.domain.compilation_models import CompilationResult
from contextshare.interface.gui.components.files_view import PRIMARY_COLOR
from contextshare.utils.i18n import i18n

if TYPE_CHECKING:
    from contextshare.interface.gui.controllers.main_controller import AppController

logger = logging.getLogger(__name__)


class ExecutionController:
    """
    Manages the compile job lifecycle (start, result, stale replies).
    """

    def __init__(self, main_controller: AppController):
        self.main = main_controller
        self.output_text: str = ""
        self._pending_ticket: Optional[int] = None

    def start_compile(self) -> None:
        """Submit the current selection to the background compile worker."""
        session = self.main.session
        try:
            ticket = session.compile_async(self.handle_thread_callback)
        except ValueError as e:
            logger.warning(f"Compile rejected: {e}")
            self.main.refresh_selection_widgets()
            return
        except RuntimeError as e:
            logger.warning(f"Compile rejected: {e}")
            return

        self._pending_ticket = ticket
        self.main.files_view.set_error("")
        self.main.files_view.btn_compile.configure(
            text=i18n.t("gui.buttons.compiling"), state="disabled", fg_color="gray"
        )

    def handle_thread_callback(self, ticket: int, result: CompilationResult) -> None:
        """Invoked on the worker thread; hops to the Tk loop."""
        self.main.app.after(0, lambda: self.apply_result(ticket, result))

    def apply_result(self, ticket: int, result: CompilationResult) -> None:
        """Render ``result`` unless a newer folder or job has superseded it."""
        if ticket == self._pending_ticket:
            self._pending_ticket = None
            self._restore_button()

        if not self.main.session.is_current(ticket):
            logger.debug(f"Discarding stale compile result (ticket {ticket})")
            return

        view = self.main.files_view
        if result.ok:
            self.output_text = result.text
            view.set_output(result.text)
            view.set_error("")
            view.set_output_actions(True)
            model = self.main.config.get("target_model", const.DEFAULT_MODEL_KEY)
            view.set_tokens(count_tokens(result.text, model))
            logger.info(f"Compiled {result.file_count} file(s) ({len(result.failed_files)} unreadable)")
        else:
            self.reset_output()
            view.set_error(i18n.t("gui.dialogs.compile_failed", error=result.error))
            mb.showerror(i18n.t("gui.dialogs.error_title"),
                         i18n.t("gui.dialogs.compile_failed", error=result.error))

    def reset_output(self) -> None:
        """Clear the output panel (new folder, failed compile)."""
        self.output_text = ""
        view = self.main.files_view
        view.set_output("")
        view.set_error("")
        view.set_tokens(None)
        view.set_output_actions(False)

    def _restore_button(self) -> None:
        self.main.files_view.btn_compile.configure(text=i18n.t("gui.buttons.compile"), fg_color=PRIMARY_COLOR)
        self.main.refresh_selection_widgets()
