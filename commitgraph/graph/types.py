"""Types and constants for commit graph layout."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from commitgraph.constants import LANE_COLORS


@dataclass(frozen=True)
class Commit:
    """A commit as handed to the layout engine.

    Only ``hash`` and ``parent_hashes`` matter for layout. The first parent is
    the primary parent; any further parents are merged-in branches.
    """

    hash: str
    parent_hashes: tuple[str, ...] = ()
    short_hash: str = ""
    message: str = ""
    author: str = ""
    email: str = ""
    date: str = ""
    refs: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.short_hash:
            object.__setattr__(self, "short_hash", self.hash[:7])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Commit":
        """Build a commit from a host record (camelCase or snake_case keys)."""
        parents = data.get("parentHashes", data.get("parent_hashes", []))
        if not isinstance(parents, list | tuple):
            raise ValueError(f"parentHashes must be a list, got {type(parents).__name__}")
        refs = data.get("refs", [])
        if not isinstance(refs, list | tuple):
            raise ValueError(f"refs must be a list, got {type(refs).__name__}")
        return cls(
            hash=str(data["hash"]),
            parent_hashes=tuple(str(p) for p in parents),
            short_hash=str(data.get("shortHash", data.get("short_hash", ""))),
            message=str(data.get("message", "")),
            author=str(data.get("author", "")),
            email=str(data.get("email", "")),
            date=str(data.get("date", "")),
            refs=tuple(str(r) for r in refs),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "shortHash": self.short_hash,
            "message": self.message,
            "author": self.author,
            "email": self.email,
            "date": self.date,
            "parentHashes": list(self.parent_hashes),
            "refs": list(self.refs),
        }


@dataclass(frozen=True)
class PassThroughLane:
    """A lane held by another branch, drawn straight through a row."""

    column: int
    color: str


@dataclass(frozen=True)
class Connection:
    """A line from a commit's dot down toward where one of its parents is drawn."""

    from_column: int
    to_column: int
    color: str

    @property
    def is_straight(self) -> bool:
        return self.from_column == self.to_column


@dataclass(frozen=True)
class GraphRow:
    """Layout of a single commit row."""

    column: int
    color: str
    num_columns: int
    pass_through_lanes: tuple[PassThroughLane, ...] = ()
    connections_down: tuple[Connection, ...] = ()


def get_lane_color(column: int, palette: Sequence[str] = LANE_COLORS) -> str:
    """Get color for a lane/column."""
    return palette[column % len(palette)]
