from __future__ import annotations

"""
Unit tests for the File Reading Component.
"""

from pathlib import Path

import pytest

from contextshare.core.compilation.reader import read_file, read_file_outcome


def test_read_preserves_crlf(tmp_path: Path) -> None:
    target = tmp_path / "crlf.txt"
    target.write_bytes(b"a\r\nb\r\n")

    assert read_file(str(target)) == "a\r\nb\r\n"


def test_read_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_file(str(tmp_path / "missing.txt"))


def test_strict_decoding_raises_on_binary(tmp_path: Path) -> None:
    target = tmp_path / "blob.bin"
    target.write_bytes(b"\xff\xfe\x00\x80")

    with pytest.raises(UnicodeDecodeError):
        read_file(str(target))


def test_replace_policy_decodes_binary(tmp_path: Path) -> None:
    target = tmp_path / "blob.bin"
    target.write_bytes(b"ok\xff")

    assert read_file(str(target), errors="replace") == "ok�"


def test_outcome_captures_failure(tmp_path: Path) -> None:
    outcome = read_file_outcome(str(tmp_path / "missing.txt"))

    assert not outcome.ok
    assert outcome.content is None
    assert outcome.error


def test_outcome_success(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("hello", encoding="utf-8")
    outcome = read_file_outcome(str(target))

    assert outcome.ok
    assert outcome.content == "hello"
