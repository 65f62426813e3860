from __future__ import annotations

from typing import List

from contextshare.core.selection.controller import SelectionController
from contextshare.domain.tree_models import TreeNode
from contextshare.interface.cli.tree_view import render_display_tree


def test_render_glyphs(sample_tree: List[TreeNode]) -> None:
    controller = SelectionController(sample_tree)
    controller.toggle_file("/r/src/util/b.py", True)

    lines = render_display_tree(controller.display_tree())

    assert lines[0] == "[-] src/"
    assert "  [ ] a.py" in lines
    assert "      empty/" in lines
    assert "  [-] util/" in lines
    assert "    [x] b.py" in lines
    assert "    [ ] c.py" in lines
    assert "    docs/" in lines
    assert lines[-1] == "[ ] README.md"
