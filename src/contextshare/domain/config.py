from __future__ import annotations

"""
Configuration Domain Management.

Persists the application state (global settings plus the last session)
as JSON in the user data directory and merges it over defaults on load,
so keys added in newer versions are always present.
"""

import json
import logging
import os
from typing import Any, Dict

from contextshare.domain import constants as const
from contextshare.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")
PROMPTS_FILE = os.path.join(get_user_data_dir(), "prompts.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default values for every session key.
    """
    return {
        "last_folder": "",

        # Compile worker
        "worker_mode": const.WORKER_MODE_THREAD,
        "max_read_workers": 8,

        # File decoding
        "encoding": "utf-8",
        "encoding_errors": "strict",

        # Token estimation
        "target_model": const.DEFAULT_MODEL_KEY,

        # Diagnostics
        "log_level": "INFO",
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default structure of config.json.
    """
    return {
        "version": const.CURRENT_CONFIG_VERSION,
        "app_settings": {
            "theme": "System",
            "locale": "en",
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Unknown top-level keys are ignored; missing ones come from the defaults.
    A missing or corrupt file yields the default state.

    Returns:
        Dict[str, Any]: The merged state.
    """
    state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("app_settings"), dict):
        state["app_settings"].update(data["app_settings"])
    if isinstance(data.get("last_session"), dict):
        state["last_session"].update(data["last_session"])

    state["version"] = const.CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk. Failures are logged, not raised.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = const.CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Return the last session merged over the defaults."""
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Store ``config`` as the last session."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
