from __future__ import annotations

"""
Unit tests for the Prompt Library Service.
"""

import json
import time
from pathlib import Path

import pytest

from contextshare.core.services.prompts import PromptStore


@pytest.fixture
def store(tmp_path: Path) -> PromptStore:
    return PromptStore(str(tmp_path / "prompts.json"))


def test_empty_store_lists_nothing(store: PromptStore) -> None:
    assert store.list_prompts() == []


def test_create_and_get(store: PromptStore) -> None:
    prompt = store.save_prompt("Review", "Review this code.")

    assert prompt.id
    assert prompt.created_at == prompt.updated_at
    assert store.get_prompt(prompt.id) == prompt


def test_update_keeps_id_and_creation_time(store: PromptStore) -> None:
    original = store.save_prompt("Review", "v1")
    time.sleep(0.01)
    updated = store.save_prompt("Review v2", "v2", original.id)

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at
    assert store.get_prompt(original.id).content == "v2"
    assert len(store.list_prompts()) == 1


def test_list_is_newest_first(store: PromptStore) -> None:
    first = store.save_prompt("First", "1")
    time.sleep(0.01)
    second = store.save_prompt("Second", "2")

    assert [p.id for p in store.list_prompts()] == [second.id, first.id]


def test_blank_fields_rejected(store: PromptStore) -> None:
    with pytest.raises(ValueError):
        store.save_prompt("   ", "content")
    with pytest.raises(ValueError):
        store.save_prompt("name", "")


def test_update_unknown_id_raises(store: PromptStore) -> None:
    with pytest.raises(KeyError):
        store.save_prompt("x", "y", "missing-id")


def test_delete(store: PromptStore) -> None:
    prompt = store.save_prompt("Tmp", "t")

    assert store.delete_prompt(prompt.id) is True
    assert store.get_prompt(prompt.id) is None
    assert store.delete_prompt(prompt.id) is False


def test_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "prompts.json"
    saved = PromptStore(str(path)).save_prompt("Keep", "me")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["prompts"][0]["id"] == saved.id
    assert PromptStore(str(path)).get_prompt(saved.id) == saved


def test_corrupt_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "prompts.json"
    path.write_text("{not json", encoding="utf-8")

    assert PromptStore(str(path)).list_prompts() == []
