from __future__ import annotations

"""
Selection State.

The set of selected file paths paired with a monotonically increasing
version. The version is the only invalidation signal for derived state;
it is bumped once per mutation batch, never per path.
"""

from typing import AbstractSet, FrozenSet, Iterable, Set


class SelectionState:
    """
    Single-owner container for the selected file paths.

    Directory paths are never stored; directory state is derived by the
    projector. Only the SelectionController mutates an instance.
    """

    def __init__(self) -> None:
        self._paths: Set[str] = set()
        self._version: int = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def paths(self) -> AbstractSet[str]:
        """Read-only view of the selected paths."""
        return frozenset(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._paths)

    def apply(self, paths: Iterable[str], selected: bool) -> int:
        """
        Add or remove ``paths`` and bump the version once.

        Args:
            paths: File paths to update (may be empty).
            selected: True to add, False to remove.

        Returns:
            int: The new version.
        """
        if selected:
            self._paths.update(paths)
        else:
            self._paths.difference_update(paths)
        return self._bump()

    def clear(self) -> int:
        self._paths.clear()
        return self._bump()

    def _bump(self) -> int:
        self._version += 1
        return self._version
