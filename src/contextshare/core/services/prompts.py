from __future__ import annotations

"""
Prompt Library Service.

JSON-backed CRUD store for reusable prompt texts. The whole library is
rewritten on each change; it is small and edited interactively.
"""

import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from contextshare.domain.prompt_models import Prompt

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PromptStore:
    """
    Persistent collection of Prompt objects.

    Args:
        file_path: JSON file holding ``{"prompts": [...]}``.
    """

    def __init__(self, file_path: str) -> None:
        self._path = file_path
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def list_prompts(self) -> List[Prompt]:
        """Return all prompts, most recently updated first."""
        with self._lock:
            prompts = self._load()
        return sorted(prompts, key=lambda p: p.updated_at, reverse=True)

    def get_prompt(self, prompt_id: str) -> Optional[Prompt]:
        with self._lock:
            for p in self._load():
                if p.id == prompt_id:
                    return p
        return None

    # -------------------------------------------------------------------------
    # COMMANDS
    # -------------------------------------------------------------------------

    def save_prompt(self, name: str, content: str, prompt_id: Optional[str] = None) -> Prompt:
        """
        Create a prompt, or update the one identified by ``prompt_id``.

        Raises:
            ValueError: If name or content is blank.
            KeyError: If ``prompt_id`` does not exist.
        """
        if not name.strip() or not content.strip():
            raise ValueError("Prompt name and content cannot be empty.")

        now = _utc_now()
        with self._lock:
            prompts = self._load()

            if prompt_id:
                for i, existing in enumerate(prompts):
                    if existing.id == prompt_id:
                        saved = Prompt(
                            id=existing.id,
                            name=name,
                            content=content,
                            created_at=existing.created_at,
                            updated_at=now,
                        )
                        prompts[i] = saved
                        break
                else:
                    logger.error(f"Prompt ID not found for update: {prompt_id}")
                    raise KeyError(prompt_id)
                logger.info(f"Updated prompt {prompt_id}")
            else:
                saved = Prompt(
                    id=str(uuid.uuid4()),
                    name=name,
                    content=content,
                    created_at=now,
                    updated_at=now,
                )
                prompts.append(saved)
                logger.info(f"Created prompt {saved.id}")

            self._store(prompts)
        return saved

    def delete_prompt(self, prompt_id: str) -> bool:
        """Delete a prompt. Returns False if it did not exist."""
        with self._lock:
            prompts = self._load()
            remaining = [p for p in prompts if p.id != prompt_id]
            if len(remaining) == len(prompts):
                logger.warning(f"Prompt ID not found for deletion: {prompt_id}")
                return False
            self._store(remaining)
        logger.info(f"Deleted prompt {prompt_id}")
        return True

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def _load(self) -> List[Prompt]:
        if not os.path.exists(self._path):
            return []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data: Any = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load prompt library {self._path}: {e}")
            return []

        raw = data.get("prompts", []) if isinstance(data, dict) else []
        prompts: List[Prompt] = []
        for item in raw:
            if isinstance(item, dict) and "id" in item:
                prompts.append(Prompt.from_dict(item))
        return prompts

    def _store(self, prompts: List[Prompt]) -> None:
        """Write atomically via a temporary file; raises OSError on failure."""
        payload: Dict[str, Any] = {"prompts": [p.to_dict() for p in prompts]}
        parent = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(parent, exist_ok=True)
        tmp_path = f"{self._path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self._path)
