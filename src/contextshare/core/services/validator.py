from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (config.json, CLI flags,
GUI widgets) and the session. Coerces types, clamps numeric ranges and
rejects unknown enum values, filling gaps from the domain defaults.
"""

import codecs
import logging
from typing import Any, Dict, List, Sequence, Tuple

from contextshare.domain import constants as const
from contextshare.domain.config import get_default_config
from contextshare.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

MIN_READ_WORKERS = 1
MAX_READ_WORKERS = 64


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a session configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: Raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and the
        list of warnings produced while coercing it.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range or unknown value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for field in ("last_folder", "encoding", "target_model", "log_level"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["max_read_workers"] = _as_int_range(
        merged.get("max_read_workers"),
        defaults["max_read_workers"],
        "max_read_workers",
        MIN_READ_WORKERS,
        MAX_READ_WORKERS,
        warnings,
        strict,
    )

    merged["worker_mode"] = _as_choice(
        merged["worker_mode"], const.WORKER_MODES, defaults["worker_mode"],
        "worker_mode", warnings, strict,
    )
    merged["encoding_errors"] = _as_choice(
        merged["encoding_errors"], const.ENCODING_ERROR_POLICIES, defaults["encoding_errors"],
        "encoding_errors", warnings, strict,
    )
    merged["log_level"] = _as_choice(
        merged["log_level"].upper(), tuple(_LEVEL_MAP), defaults["log_level"],
        "log_level", warnings, strict,
    )

    if merged["target_model"] not in const.AI_MODELS:
        msg = f"Unknown target model '{merged['target_model']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using default model.")
        merged["target_model"] = defaults["target_model"]

    try:
        codecs.lookup(merged["encoding"])
    except LookupError:
        msg = f"Unknown encoding '{merged['encoding']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using {defaults['encoding']}.")
        merged["encoding"] = defaults["encoding"]

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int_range(
        value: Any,
        fallback: int,
        field: str,
        lower: int,
        upper: int,
        warnings: List[str],
        strict: bool
) -> int:
    """Coerce to int and clamp into [lower, upper]."""
    if value is None:
        return fallback

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    try:
        number = int(value)
    except ValueError:
        msg = f"Invalid field '{field}': '{value}' is not a number."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < lower or number > upper:
        msg = f"Field '{field}' out of range [{lower}, {upper}]: {number}."
        if strict:
            raise ValueError(msg)
        number = max(lower, min(upper, number))
        warnings.append(f"{msg} Clamped to {number}.")
    return number


def _as_choice(
        value: str,
        choices: Sequence[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool
) -> str:
    if value in choices:
        return value
    msg = f"Invalid field '{field}': '{value}' not in {list(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback
