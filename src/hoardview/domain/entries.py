"""Directory listing entries and font groups.

This module defines the nodes of the remote repository's recursive tree
listing and the groups the collection builder arranges them into.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntryType(str, Enum):
    """Kind of node in the remote tree listing."""

    TREE = "tree"
    BLOB = "blob"


@dataclass(frozen=True)
class DirectoryEntry:
    """One node of the remote repository's recursive tree listing.

    Attributes:
        path: Path of the node relative to the repository root
        type: Whether the node is a directory (tree) or a file (blob)
    """

    path: str
    type: EntryType

    @property
    def is_tree(self) -> bool:
        """Check whether this entry marks a directory."""
        return self.type == EntryType.TREE

    @property
    def name(self) -> str:
        """Last path segment of the entry."""
        return self.path.split("/")[-1]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for the cache store.

        Returns:
            Dictionary representation of the entry
        """
        return {"path": self.path, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryEntry":
        """Deserialize from dictionary.

        Keys other than ``path`` and ``type`` (as found in the GitHub tree
        payload) are ignored.

        Args:
            data: Dictionary representation of the entry

        Returns:
            DirectoryEntry instance
        """
        return cls(path=data["path"], type=EntryType(data["type"]))


@dataclass
class FontGroup:
    """Consecutive font entries that share a directory heading.

    Attributes:
        heading: Directory path shown above the group, None for top-level files
        entries: Font source entries in listing order
    """

    heading: str | None
    entries: list[DirectoryEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)
