from __future__ import annotations

"""
Unit tests for Token Estimation.

Verifies:
1. Delegation to tiktoken with the encoding matching the model.
2. Fallback to the heuristic when the encoding cannot be loaded.
3. Handling of empty inputs and unknown model keys.
"""

from unittest.mock import MagicMock, patch

import pytest

from contextshare.core.processing import tokenizer
from contextshare.core.processing.tokenizer import (
    HeuristicStrategy,
    count_tokens,
    resolve_encoding_name,
)
from contextshare.domain import constants as const


@pytest.fixture(autouse=True)
def clear_encoding_cache():
    tokenizer._ENCODING_CACHE.clear()
    yield
    tokenizer._ENCODING_CACHE.clear()


def test_empty_text_is_zero() -> None:
    assert count_tokens("") == 0


def test_tiktoken_delegation() -> None:
    fake_encoding = MagicMock()
    fake_encoding.encode.return_value = [1, 2, 3, 4, 5]

    with patch("contextshare.core.processing.tokenizer.tiktoken.get_encoding",
               return_value=fake_encoding) as get_encoding:
        assert count_tokens("some text", const.DEFAULT_MODEL_KEY) == 5
        get_encoding.assert_called_once_with("o200k_base")


def test_encoding_is_cached() -> None:
    fake_encoding = MagicMock()
    fake_encoding.encode.return_value = [1]

    with patch("contextshare.core.processing.tokenizer.tiktoken.get_encoding",
               return_value=fake_encoding) as get_encoding:
        count_tokens("a")
        count_tokens("b")
        assert get_encoding.call_count == 1


def test_fallback_to_heuristic_on_failure() -> None:
    with patch("contextshare.core.processing.tokenizer.tiktoken.get_encoding",
               side_effect=Exception("offline")):
        # 10 chars -> ceil(10 / 4) = 3
        assert count_tokens("1234567890") == 3


def test_unknown_model_key_uses_default() -> None:
    fake_encoding = MagicMock()
    fake_encoding.encode.return_value = [1, 2]

    with patch("contextshare.core.processing.tokenizer.tiktoken.get_encoding",
               return_value=fake_encoding):
        assert count_tokens("hi", "No Such Model") == 2


def test_resolve_encoding_name() -> None:
    assert resolve_encoding_name("gpt-4o") == "o200k_base"
    assert resolve_encoding_name("gpt-4-turbo") == "cl100k_base"
    assert resolve_encoding_name("gpt-3.5-turbo") == "cl100k_base"


def test_heuristic_strategy() -> None:
    assert HeuristicStrategy().count("12345678", "any") == 2
