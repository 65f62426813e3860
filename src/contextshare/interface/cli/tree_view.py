from __future__ import annotations

"""
Text rendering of the projected checkbox tree for terminal output.
"""

from typing import List, Sequence

from contextshare.domain.tree_models import DisplayNode

CHECK_GLYPHS = {
    "checked": "[x]",
    "indeterminate": "[-]",
    "unchecked": "[ ]",
}
NO_CHECKBOX = "   "


def render_display_tree(nodes: Sequence[DisplayNode], indent: str = "  ") -> List[str]:
    """
    Render display nodes one per line.

    Directories without any file beneath them get no checkbox glyph.
    """
    lines: List[str] = []
    _render(nodes, 0, indent, lines)
    return lines


def _render(nodes: Sequence[DisplayNode], depth: int, indent: str, out: List[str]) -> None:
    for node in nodes:
        if node.is_dir and not node.has_files:
            glyph = NO_CHECKBOX
        else:
            glyph = CHECK_GLYPHS[node.check_state]
        suffix = "/" if node.is_dir else ""
        out.append(f"{indent * depth}{glyph} {node.name}{suffix}")
        if node.is_dir:
            _render(node.children, depth + 1, indent, out)
