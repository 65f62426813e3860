from __future__ import annotations

import logging
import tkinter.messagebox as mb
from typing import TYPE_CHECKING, Any, Optional

from contextshare.utils.i18n import i18n

if TYPE_CHECKING:
    from contextshare.interface.gui.controllers.main_controller import AppController

logger = logging.getLogger(__name__)


class PromptsController:
    """
    Handles create, update, delete and copy of saved prompts.
    """

    def __init__(self, main_controller: AppController):
        self.main = main_controller
        self.view: Any = None
        self.selected_id: Optional[str] = None

    def bind(self, view: Any) -> None:
        self.view = view
        view.on_select = self.select_prompt
        view.btn_new.configure(command=self.new_prompt)
        view.btn_save.configure(command=self.save_prompt)
        view.btn_delete.configure(command=self.delete_prompt)
        view.btn_copy.configure(command=self.copy_prompt)
        self.refresh()

    def refresh(self) -> None:
        self.view.render_list(self.main.prompt_store.list_prompts(), self.selected_id)

    def select_prompt(self, prompt_id: str) -> None:
        prompt = self.main.prompt_store.get_prompt(prompt_id)
        if prompt is None:
            self.selected_id = None
            self.refresh()
            return
        self.selected_id = prompt.id
        self.view.set_form(prompt.name, prompt.content)
        self.refresh()

    def new_prompt(self) -> None:
        self.selected_id = None
        self.view.set_form()
        self.refresh()

    def save_prompt(self) -> None:
        form = self.view.get_form()
        try:
            prompt = self.main.prompt_store.save_prompt(form["name"], form["content"], self.selected_id)
        except ValueError:
            mb.showwarning(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.prompt_invalid"))
            return
        except KeyError:
            # Deleted elsewhere; store as new
            prompt = self.main.prompt_store.save_prompt(form["name"], form["content"])
        except OSError as e:
            mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.save_failed", error=str(e)))
            return
        self.selected_id = prompt.id
        self.refresh()

    def delete_prompt(self) -> None:
        if not self.selected_id:
            return
        prompt = self.main.prompt_store.get_prompt(self.selected_id)
        name = prompt.name if prompt else self.selected_id
        if not mb.askyesno(i18n.t("gui.dialogs.delete_prompt_title"),
                           i18n.t("gui.dialogs.delete_prompt_msg", name=name)):
            return
        try:
            self.main.prompt_store.delete_prompt(self.selected_id)
        except OSError as e:
            mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.save_failed", error=str(e)))
            return
        self.new_prompt()

    def copy_prompt(self) -> None:
        content = self.view.get_form()["content"]
        if not content:
            return
        self.main.app.clipboard_clear()
        self.main.app.clipboard_append(content)
        logger.debug("Prompt copied to clipboard")
