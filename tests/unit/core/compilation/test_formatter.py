from __future__ import annotations

"""
Unit tests for the Compiled Artifact Formatter.

Verifies the exact block layout for readable and unreadable files and the
root-relative, forward-slash header paths.
"""

import os

from contextshare.core.compilation.formatter import (
    relative_display_path,
    render_artifact,
    render_error_block,
    render_file_block,
)
from contextshare.domain.compilation_models import FileReadOutcome


def test_file_block_layout() -> None:
    block = render_file_block("src/a.py", "print(1)")
    assert block == '"src/a.py"\n\n\nprint(1)\n******** END OF FILE **********\n\n'


def test_file_block_keeps_content_verbatim() -> None:
    content = "line1\r\nline2\n\n"
    block = render_file_block("x.txt", content)
    assert f"\n\n\n{content}\n******** END OF FILE" in block


def test_error_block_layout() -> None:
    block = render_error_block("secret.bin", "Permission denied")
    assert block == "// Error reading file: secret.bin\n// Permission denied\n\n"


def test_relative_path_uses_forward_slashes(tmp_path) -> None:
    root = str(tmp_path)
    nested = os.path.join(root, "pkg", "sub", "deep.txt")
    assert relative_display_path(nested, root) == "pkg/sub/deep.txt"


def test_render_artifact_keeps_given_order(tmp_path) -> None:
    root = str(tmp_path)
    outcomes = [
        FileReadOutcome(os.path.join(root, "b.txt"), content="B"),
        FileReadOutcome(os.path.join(root, "a.txt"), error="boom"),
    ]
    text = render_artifact(outcomes, root)

    assert text.index('"b.txt"') < text.index("// Error reading file: a.txt")
    assert text.count("******** END OF FILE **********") == 1
