from __future__ import annotations

"""
File Reading Component.

Reads selected files verbatim. Newline translation is disabled so CRLF
content reaches the artifact unchanged; decoding failures propagate to the
caller unless a lenient error policy is configured.
"""

from contextshare.domain.compilation_models import FileReadOutcome


def read_file(file_path: str, encoding: str = "utf-8", errors: str = "strict") -> str:
    """
    Return the full text of ``file_path``.

    Args:
        file_path: Absolute path to the file.
        encoding: Text encoding used to decode the bytes.
        errors: Codec error policy ("strict" or "replace").

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If decoding fails under the "strict" policy.
    """
    with open(file_path, "r", encoding=encoding, errors=errors, newline="") as f:
        return f.read()


def read_file_outcome(file_path: str, encoding: str = "utf-8", errors: str = "strict") -> FileReadOutcome:
    """
    Read a file and capture failure as data instead of raising.

    Used as the unit of work of the fan-out so that one failed read never
    cancels or delays its siblings.
    """
    try:
        return FileReadOutcome(file_path=file_path, content=read_file(file_path, encoding, errors))
    except (OSError, UnicodeDecodeError) as e:
        return FileReadOutcome(file_path=file_path, error=str(e) or type(e).__name__)
