from __future__ import annotations

"""
Unit tests for the Configuration Validation Service.

Verifies:
1. Defaults fill missing keys and unknown keys are dropped.
2. Type coercion and clamping in lenient mode.
3. Exceptions in strict mode.
"""

import pytest

from contextshare.core.services.validator import validate_config
from contextshare.domain import constants as const
from contextshare.domain.config import get_default_config


def test_empty_dict_yields_defaults() -> None:
    clean, warnings = validate_config({})
    assert clean == get_default_config()
    assert warnings == []


def test_non_dict_falls_back_to_defaults() -> None:
    clean, warnings = validate_config(["not", "a", "dict"])
    assert clean == get_default_config()
    assert warnings


def test_non_dict_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_config("bad", strict=True)


def test_unknown_keys_are_dropped() -> None:
    clean, _ = validate_config({"surprise": 1})
    assert "surprise" not in clean


def test_workers_string_is_coerced_and_clamped() -> None:
    clean, warnings = validate_config({"max_read_workers": "500"})
    assert clean["max_read_workers"] == 64
    assert any("out of range" in w for w in warnings)

    clean, _ = validate_config({"max_read_workers": "4"})
    assert clean["max_read_workers"] == 4


def test_bool_is_not_accepted_as_int() -> None:
    clean, warnings = validate_config({"max_read_workers": True})
    assert clean["max_read_workers"] == get_default_config()["max_read_workers"]
    assert warnings


def test_invalid_choices_fall_back() -> None:
    clean, warnings = validate_config({
        "worker_mode": "fiber",
        "encoding_errors": "ignore",
        "log_level": "chatty",
        "target_model": "gpt-99",
        "encoding": "klingon-8",
    })
    assert clean["worker_mode"] == const.WORKER_MODE_THREAD
    assert clean["encoding_errors"] == "strict"
    assert clean["log_level"] == "INFO"
    assert clean["target_model"] == const.DEFAULT_MODEL_KEY
    assert clean["encoding"] == "utf-8"
    assert len(warnings) == 5


def test_log_level_is_case_insensitive() -> None:
    clean, warnings = validate_config({"log_level": "debug"})
    assert clean["log_level"] == "DEBUG"
    assert warnings == []


def test_strict_mode_raises_on_bad_values() -> None:
    with pytest.raises(ValueError):
        validate_config({"worker_mode": "fiber"}, strict=True)
    with pytest.raises(TypeError):
        validate_config({"last_folder": 42}, strict=True)
    with pytest.raises(ValueError):
        validate_config({"max_read_workers": 0}, strict=True)


def test_process_mode_is_accepted() -> None:
    clean, warnings = validate_config({"worker_mode": const.WORKER_MODE_PROCESS})
    assert clean["worker_mode"] == const.WORKER_MODE_PROCESS
    assert warnings == []
