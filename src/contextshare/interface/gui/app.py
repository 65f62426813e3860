from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle Orchestrator.

Initializes the CustomTkinter environment, restores persisted state,
assembles the views, binds them to the AppController and runs the log
polling loop until the window closes.
"""

import logging
import queue
from logging.handlers import QueueHandler
from typing import Any, Dict

from contextshare.core.services.validator import validate_config
from contextshare.domain import config as cfg
from contextshare.domain import constants as const
from contextshare.infra.logging import LoggingConfig, configure_logging, get_default_gui_log_path
from contextshare.interface.gui.components import sidebar as sidebar_mod
from contextshare.interface.gui.components.files_view import FilesFrame
from contextshare.interface.gui.components.logs_console import LogsFrame
from contextshare.interface.gui.components.main_window import create_main_window
from contextshare.interface.gui.components.prompts_view import PromptsFrame
from contextshare.interface.gui.controllers.main_controller import AppController

logger = logging.getLogger(__name__)

LOG_POLL_MS = 100


def main() -> None:
    """
    Initialize and launch the Graphical User Interface.
    """
    # -------------------------------------------------------------------------
    # PHASE 1: PERSISTENT STATE RECOVERY
    # -------------------------------------------------------------------------
    app_state = cfg.load_app_state()
    config, warnings = validate_config(cfg.load_config(), strict=False)

    # -------------------------------------------------------------------------
    # PHASE 2: DIAGNOSTIC INFRASTRUCTURE SETUP
    # -------------------------------------------------------------------------
    log_path = get_default_gui_log_path()
    configure_logging(LoggingConfig(level=config["log_level"], console=True, log_file=log_path))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")
    for w in warnings:
        logger.warning(f"Configuration constraint: {w}")

    gui_log_queue: queue.Queue = queue.Queue()
    gui_log_handler = QueueHandler(gui_log_queue)
    gui_log_handler.setLevel(logging.INFO)
    logging.getLogger().addHandler(gui_log_handler)

    # -------------------------------------------------------------------------
    # PHASE 3: VIEW CONSTRUCTION
    # -------------------------------------------------------------------------
    app = create_main_window(app_state["app_settings"].get("theme", "System"))

    views: Dict[str, Any] = {}

    def show_frame(name: str) -> None:
        for frame in views.values():
            frame.grid_forget()
        views[name].grid(row=0, column=1, sticky="nsew", padx=20, pady=20)
        sidebar_frame.set_active(name)

    sidebar_frame = sidebar_mod.SidebarFrame(app, nav_callback=show_frame)
    sidebar_frame.grid(row=0, column=0, sticky="nsew")

    files_frame = FilesFrame(app)
    prompts_frame = PromptsFrame(app)
    logs_frame = LogsFrame(app)
    views[sidebar_mod.VIEW_FILES] = files_frame
    views[sidebar_mod.VIEW_PROMPTS] = prompts_frame
    views[sidebar_mod.VIEW_LOGS] = logs_frame

    show_frame(sidebar_mod.VIEW_FILES)

    # -------------------------------------------------------------------------
    # PHASE 4: CONTROLLER BINDING
    # -------------------------------------------------------------------------
    controller = AppController(app, config, app_state)
    controller.register_views(files_frame, prompts_frame, logs_frame, sidebar_frame)
    controller.execution_controller.reset_output()
    controller.restore_last_folder()

    # -------------------------------------------------------------------------
    # PHASE 5: LOG POLLING
    # -------------------------------------------------------------------------
    log_formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", "%H:%M:%S")

    def poll_log_queue() -> None:
        while True:
            try:
                record = gui_log_queue.get_nowait()
            except queue.Empty:
                break
            logs_frame.append_log(log_formatter.format(record))
        app.after(LOG_POLL_MS, poll_log_queue)

    # -------------------------------------------------------------------------
    # PHASE 6: LIFECYCLE FINALIZATION
    # -------------------------------------------------------------------------
    def on_closing() -> None:
        controller.persist_state()
        logging.getLogger().removeHandler(gui_log_handler)
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    app.after(LOG_POLL_MS, poll_log_queue)

    app.mainloop()


if __name__ == "__main__":
    main()
