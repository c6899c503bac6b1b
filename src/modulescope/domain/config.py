from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences and the last inspection
session using JSON. Missing keys are filled from the defaults; unreadable
files fall back to the defaults entirely.
"""

import json
import logging
import os
from typing import Any, Dict

from modulescope.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_ANNOTATION_KINDS
from modulescope.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Input
        "snapshot_path": "",
        "base_package": "",

        # Scope & Annotations
        "single_level": False,
        "annotation_kinds": list(DEFAULT_ANNOTATION_KINDS),
        "annotated_with": "",

        # Output
        "show_classes": False,
        "show_tree": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": get_default_config(),
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
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

    session = data.get("last_session")
    if isinstance(session, dict):
        state["last_session"].update(session)

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Retrieve the last session configuration merged over the defaults."""
    defaults = get_default_config()
    defaults.update(load_app_state().get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Save the provided config as the 'last_session'."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
