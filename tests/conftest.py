from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An isolated user data directory so tests never touch the real one.
3. Shared in-memory trees and on-disk sample projects.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

# Must be set before contextshare.domain.config resolves its file paths
os.environ.setdefault("CONTEXTSHARE_HOME", tempfile.mkdtemp(prefix="contextshare-tests-"))

from contextshare.domain.tree_models import NodeKind, TreeNode  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "gui: controller tests that run against mocked views")


# -----------------------------------------------------------------------------
# Tree Builders
# -----------------------------------------------------------------------------
def make_file(path: str) -> TreeNode:
    return TreeNode(name=path.rsplit("/", 1)[-1], path=path, kind=NodeKind.FILE)


def make_dir(path: str, *children: TreeNode) -> TreeNode:
    return TreeNode(
        name=path.rsplit("/", 1)[-1],
        path=path,
        kind=NodeKind.DIRECTORY,
        children=tuple(children),
    )


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> List[TreeNode]:
    """
    In-memory snapshot rooted at /r.

    Structure:
    /r
      /src
        a.py
        /empty
        /util
          b.py
          c.py
      /docs
        /img
      README.md
    """
    return [
        make_dir(
            "/r/src",
            make_file("/r/src/a.py"),
            make_dir("/r/src/empty"),
            make_dir(
                "/r/src/util",
                make_file("/r/src/util/b.py"),
                make_file("/r/src/util/c.py"),
            ),
        ),
        make_dir("/r/docs", make_dir("/r/docs/img")),
        make_file("/r/README.md"),
    ]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    On-disk project used by scanner, engine and session tests.

    Structure:
    /project
      /pkg
        core.py
        /sub
          deep.txt
      /empty
      README.md
      notes.txt
    """
    root = tmp_path / "project"
    (root / "pkg" / "sub").mkdir(parents=True)
    (root / "empty").mkdir()

    (root / "pkg" / "core.py").write_text("def core():\n    return 1\n", encoding="utf-8")
    (root / "pkg" / "sub" / "deep.txt").write_text("deep", encoding="utf-8")
    (root / "README.md").write_text("# Project", encoding="utf-8")
    (root / "notes.txt").write_text("line one\nline two", encoding="utf-8")
    return root
