from __future__ import annotations

"""
Saved Prompt Data Model.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Prompt:
    """
    A reusable prompt text kept in the prompt library.

    Attributes:
        id: Unique identifier (uuid4 string).
        name: Display name.
        content: Prompt body.
        created_at: ISO-8601 UTC creation timestamp.
        updated_at: ISO-8601 UTC timestamp of the last save.
    """
    id: str
    name: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prompt":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            content=str(data.get("content", "")),
            created_at=str(data.get("created_at", "")),
            updated_at=str(data.get("updated_at", "")),
        )
