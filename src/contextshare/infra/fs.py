from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Cross-platform helpers for locating the application data directory,
normalizing user supplied paths and persisting compiled artifacts.
"""

import os
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "ContextShare"
UNIX_APP_DIR_NAME = ".contextshare"
APP_DIR_ENV_VAR = "CONTEXTSHARE_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Resolution order:
    - $CONTEXTSHARE_HOME when set
    - Windows: %LOCALAPPDATA%/ContextShare
    - Linux/Mac: ~/.contextshare

    The directory is created if it does not exist.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = os.environ.get(APP_DIR_ENV_VAR, "")

    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a user supplied directory string into an absolute path.

    Expands environment variables and ``~``. Empty input resolves to
    ``fallback``; an empty fallback yields an empty string so callers can
    detect "no folder chosen".

    Args:
        path: Raw input path.
        fallback: Value used when ``path`` is blank.

    Returns:
        str: Absolute path, or "" when both inputs are blank.
    """
    p = (path or "").strip() or (fallback or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


# -----------------------------------------------------------------------------
# PERSISTENCE API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Recursively create a directory.

    Returns:
        Tuple[bool, Optional[str]]: (success, error message).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_text_file(path: str, content: str) -> str:
    """
    Write compiled output to ``path`` exactly as given.

    Newline translation is disabled so the artifact on disk is byte-identical
    to what is shown in the output panel.

    Args:
        path: Destination file path.
        content: Text to write.

    Returns:
        str: Absolute path of the written file.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    target = os.path.abspath(path)
    parent = os.path.dirname(target)
    ok, err = safe_mkdir(parent)
    if not ok:
        raise OSError(f"Cannot create directory '{parent}': {err}")

    with open(target, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return target
