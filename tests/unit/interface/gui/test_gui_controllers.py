from __future__ import annotations

"""
Unit tests for GUI Controllers.

Verifies the AppController and its sub-controllers against mocked views:
checkbox toggling, background listing hand-off, stale compile replies and
prompt library actions. No Tk window is created.
"""

import os
from pathlib import Path
from typing import Any, Callable, List
from unittest.mock import MagicMock, patch

import pytest

from contextshare.core.services.prompts import PromptStore
from contextshare.core.services.scanner import list_tree
from contextshare.core.services.session import CompileSession
from contextshare.domain.compilation_models import create_error_result, create_success_result
from contextshare.domain.config import get_default_config
from contextshare.interface.gui.controllers.main_controller import AppController


def _run_after_immediately(_delay: int, fn: Any = None) -> None:
    if fn is not None:
        fn()


@pytest.fixture
def controller(tmp_path: Path) -> AppController:
    app = MagicMock()
    app.after.side_effect = _run_after_immediately
    session = CompileSession(get_default_config())
    store = PromptStore(str(tmp_path / "prompts.json"))

    ctrl = AppController(app, get_default_config(), {"app_settings": {}}, session=session, prompt_store=store)
    ctrl.register_views(MagicMock(), MagicMock(), MagicMock(), MagicMock())
    return ctrl


def _load(controller: AppController, project_dir: Path) -> None:
    folder = str(project_dir)
    controller._apply_listing(controller._listing_id, folder, list_tree(folder))


@pytest.mark.gui
def test_listing_result_installs_tree(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)

    assert controller.session.root == os.path.abspath(str(project_dir))
    assert controller.config["last_folder"] == controller.session.root
    controller.files_view.render_tree.assert_called()


@pytest.mark.gui
def test_stale_listing_is_discarded(controller: AppController, project_dir: Path) -> None:
    controller._listing_id = 2
    controller._apply_listing(1, str(project_dir), list_tree(str(project_dir)))

    assert not controller.session.has_folder


@pytest.mark.gui
def test_reopening_same_folder_drops_earlier_listing(controller: AppController, project_dir: Path) -> None:
    callbacks: List[Callable[[str, Any], None]] = []
    folder = str(project_dir)

    with patch("contextshare.interface.gui.controllers.main_controller.threads.start_listing",
               side_effect=lambda lister, path, on_complete: callbacks.append(on_complete)):
        controller.open_folder(folder)
        controller.open_folder(folder)

    first, second = callbacks
    first(folder, [])
    assert not controller.session.has_folder

    second(folder, list_tree(folder))
    assert controller.session.has_folder
    assert controller.session.total_files == 4

    # A late reply from the first listing must not replace the second snapshot
    first(folder, [])
    assert controller.session.total_files == 4


@pytest.mark.gui
def test_listing_error_shows_dialog(controller: AppController) -> None:
    with patch("contextshare.interface.gui.controllers.main_controller.mb.showerror") as showerror:
        controller._apply_listing(controller._listing_id, "/bad", OSError("denied"))
    showerror.assert_called_once()
    assert not controller.session.has_folder


@pytest.mark.gui
def test_toggle_file_and_directory(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    pkg = os.path.join(controller.session.root, "pkg")
    core = os.path.join(pkg, "core.py")

    controller.on_toggle(core)
    assert controller.session.selected_count == 1
    controller.files_view.set_file_count.assert_called_with(1, 4)

    # Indeterminate directory becomes fully checked
    controller.on_toggle(pkg)
    assert controller.session.selected_count == 2

    # Fully checked directory becomes unchecked
    controller.on_toggle(pkg)
    assert controller.session.selected_count == 0


@pytest.mark.gui
def test_toggle_empty_directory_is_ignored(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    version = controller.session.version

    controller.on_toggle(os.path.join(controller.session.root, "empty"))
    assert controller.session.version == version


@pytest.mark.gui
def test_compile_result_is_rendered(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    execution = controller.execution_controller
    ticket = controller.session._ticket

    with patch("contextshare.interface.gui.controllers.execution_controller.count_tokens", return_value=7):
        execution.apply_result(ticket, create_success_result("TEXT", 1))

    assert execution.output_text == "TEXT"
    controller.files_view.set_output.assert_called_with("TEXT")
    controller.files_view.set_tokens.assert_called_with(7)


@pytest.mark.gui
def test_stale_compile_result_is_dropped(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    execution = controller.execution_controller
    stale_ticket = controller.session._ticket - 1

    execution.apply_result(stale_ticket, create_success_result("OLD", 1))
    assert execution.output_text == ""


@pytest.mark.gui
def test_failed_compile_clears_output(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    execution = controller.execution_controller
    execution.output_text = "previous"

    with patch("contextshare.interface.gui.controllers.execution_controller.mb.showerror") as showerror:
        execution.apply_result(controller.session._ticket, create_error_result("worker crashed", 1))

    assert execution.output_text == ""
    showerror.assert_called_once()


@pytest.mark.gui
def test_start_compile_without_selection_does_nothing(controller: AppController, project_dir: Path) -> None:
    _load(controller, project_dir)
    controller.execution_controller.start_compile()
    assert controller.execution_controller._pending_ticket is None


@pytest.mark.gui
def test_prompt_save_and_delete(controller: AppController) -> None:
    prompts = controller.prompts_controller
    controller.prompts_view.get_form.return_value = {"name": "Review", "content": "Check it"}

    prompts.save_prompt()
    assert prompts.selected_id is not None
    assert len(controller.prompt_store.list_prompts()) == 1

    with patch("contextshare.interface.gui.controllers.prompts_controller.mb.askyesno", return_value=True):
        prompts.delete_prompt()
    assert controller.prompt_store.list_prompts() == []
    assert prompts.selected_id is None


@pytest.mark.gui
def test_prompt_save_rejects_blank(controller: AppController) -> None:
    controller.prompts_view.get_form.return_value = {"name": "", "content": ""}
    with patch("contextshare.interface.gui.controllers.prompts_controller.mb.showwarning") as warn:
        controller.prompts_controller.save_prompt()
    warn.assert_called_once()
