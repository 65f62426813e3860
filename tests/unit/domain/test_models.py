from __future__ import annotations

"""
Unit tests for the domain data models.
"""

import dataclasses

import pytest

from contextshare.domain.compilation_models import (
    FileReadFailure,
    create_error_result,
    create_success_result,
)
from contextshare.domain.prompt_models import Prompt
from contextshare.domain.tree_models import DisplayNode, NodeKind, TreeNode


def test_tree_node_iter_files() -> None:
    tree = TreeNode("d", "/d", NodeKind.DIRECTORY, (
        TreeNode("a", "/d/a", NodeKind.FILE),
        TreeNode("e", "/d/e", NodeKind.DIRECTORY, (TreeNode("b", "/d/e/b", NodeKind.FILE),)),
    ))
    assert [f.path for f in tree.iter_files()] == ["/d/a", "/d/e/b"]


def test_tree_node_is_immutable() -> None:
    node = TreeNode("a", "/a", NodeKind.FILE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "b"  # type: ignore[misc]


def test_display_node_check_state() -> None:
    assert DisplayNode("f", "/f", NodeKind.FILE, is_selected=True).check_state == "checked"
    assert DisplayNode("d", "/d", NodeKind.DIRECTORY, is_indeterminate=True).check_state == "indeterminate"
    assert DisplayNode("d", "/d", NodeKind.DIRECTORY).check_state == "unchecked"


def test_result_factories() -> None:
    ok = create_success_result("text", 2, [FileReadFailure("x", "boom")])
    assert ok.ok and ok.text == "text" and ok.file_count == 2
    assert ok.failed_files[0].rel_path == "x"

    err = create_error_result("crash", 3)
    assert not err.ok
    assert err.text == ""
    assert err.file_count == 3
    assert err.failed_files == []


def test_prompt_dict_round_trip() -> None:
    prompt = Prompt("id-1", "Name", "Body", "2024-01-01T00:00:00+00:00", "2024-01-02T00:00:00+00:00")
    assert Prompt.from_dict(prompt.to_dict()) == prompt
