from __future__ import annotations

"""
Token Estimation.

Estimates how many tokens the compiled artifact will consume in the target
model's context window. Uses tiktoken's BPE encodings; when an encoding
cannot be loaded (first use offline, corrupted cache) the character-density
heuristic is used instead.
"""

import logging
import math
import threading
from abc import ABC, abstractmethod
from typing import Dict

import tiktoken

from contextshare.domain import constants as const

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4
MODERN_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

_ENCODING_CACHE: Dict[str, "tiktoken.Encoding"] = {}
_CACHE_LOCK = threading.Lock()


# -----------------------------------------------------------------------------
# STRATEGIES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):

    @abstractmethod
    def count(self, text: str, model_id: str) -> int:
        """Return the number of tokens in ``text``."""


class HeuristicStrategy(TokenizerStrategy):
    """Character-density estimate."""

    def count(self, text: str, model_id: str) -> int:
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """OpenAI BPE encoder."""

    def count(self, text: str, model_id: str) -> int:
        encoding = _get_encoding(resolve_encoding_name(model_id))
        return len(encoding.encode(text, disallowed_special=()))


def resolve_encoding_name(model_id: str) -> str:
    """Older GPT-4/3.5 models use cl100k; everything else o200k."""
    lowered = model_id.lower()
    if any(marker in lowered for marker in ("gpt-4-", "gpt-3.5", "legacy")):
        return LEGACY_ENCODING
    return MODERN_ENCODING


def _get_encoding(name: str) -> "tiktoken.Encoding":
    with _CACHE_LOCK:
        encoding = _ENCODING_CACHE.get(name)
        if encoding is None:
            encoding = tiktoken.get_encoding(name)
            _ENCODING_CACHE[name] = encoding
        return encoding


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def count_tokens(text: str, model_key: str = const.DEFAULT_MODEL_KEY) -> int:
    """
    Estimate the token count of ``text`` for a model from ``AI_MODELS``.

    Args:
        text: Compiled artifact.
        model_key: Display key of the target model (unknown keys use the
            default model).

    Returns:
        int: Token estimate.
    """
    if not text:
        return 0

    model_id = const.AI_MODELS.get(model_key, const.AI_MODELS[const.DEFAULT_MODEL_KEY])
    try:
        return TiktokenStrategy().count(text, model_id)
    except Exception as e:
        logger.warning(f"Tokenizer: tiktoken unavailable ({e}). Using heuristic estimate.")
        return HeuristicStrategy().count(text, model_id)
