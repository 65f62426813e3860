from __future__ import annotations

"""
Domain Constants.

Application version, artifact delimiters and the model identifiers offered
for token estimation.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"
APP_NAME = "ContextShare"

# -----------------------------------------------------------------------------
# COMPILED ARTIFACT FORMAT
# -----------------------------------------------------------------------------
END_OF_FILE_MARKER = "******** END OF FILE **********"
ERROR_LINE_PREFIX = "// "
ERROR_HEADER_PREFIX = "// Error reading file: "

# -----------------------------------------------------------------------------
# WORKER MODES
# -----------------------------------------------------------------------------
WORKER_MODE_THREAD = "thread"
WORKER_MODE_PROCESS = "process"
WORKER_MODES = (WORKER_MODE_THREAD, WORKER_MODE_PROCESS)

ENCODING_ERROR_POLICIES = ("strict", "replace")

# -----------------------------------------------------------------------------
# TOKEN ESTIMATION TARGETS
# -----------------------------------------------------------------------------
DEFAULT_MODEL_KEY = "- Default Model -"

AI_MODELS: Dict[str, str] = {
    DEFAULT_MODEL_KEY: "gpt-4o",
    "ChatGPT 4o": "chatgpt-4o-latest",
    "OpenAI o3": "o3",
    "GPT-4 Turbo (legacy)": "gpt-4-turbo",
    "GPT-3.5 Turbo (legacy)": "gpt-3.5-turbo",
}
