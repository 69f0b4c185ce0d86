"""Commit graph layout - assigns lanes, colors and connectors to commits."""

import heapq
from collections.abc import Sequence

from commitgraph.constants import LANE_COLORS
from commitgraph.graph.types import Commit, Connection, GraphRow, PassThroughLane, get_lane_color


class _LaneArena:
    """
    Scratch lane state for a single layout pass.

    Each lane is either free (None) or holds the hash of a parent that some
    already-placed commit is waiting for. Alongside the lane list we keep an
    index from pending hash to lane, and a min-heap of free lane indices so the
    lowest free lane can be found without scanning. A lane goes on the heap
    only when it is released and stays free, and comes off it when allocated.
    Entries left behind by trimming are invalidated lazily: an entry is only
    trusted if that lane is still in range and still free when it is popped.
    """

    def __init__(self) -> None:
        self.lanes: list[str | None] = []
        self._lane_of: dict[str, int] = {}
        self._free: list[int] = []

    def __len__(self) -> int:
        return len(self.lanes)

    def find(self, commit_hash: str) -> int | None:
        """Return the lane waiting for commit_hash, if any."""
        return self._lane_of.get(commit_hash)

    def allocate(self) -> int:
        """Return the lowest free lane, appending a new one if none is free."""
        while self._free:
            lane = heapq.heappop(self._free)
            if lane < len(self.lanes) and self.lanes[lane] is None:
                return lane
        self.lanes.append(None)
        return len(self.lanes) - 1

    def occupy(self, lane: int, commit_hash: str) -> None:
        self.lanes[lane] = commit_hash
        self._lane_of[commit_hash] = lane

    def vacate(self, lane: int) -> None:
        """Clear a lane without offering it for allocation yet."""
        occupant = self.lanes[lane]
        if occupant is not None and self._lane_of.get(occupant) == lane:
            del self._lane_of[occupant]
        self.lanes[lane] = None

    def release(self, lane: int) -> None:
        """Offer a vacated lane to allocate()."""
        heapq.heappush(self._free, lane)

    @property
    def free_count(self) -> int:
        """Entries currently queued on the free-lane heap."""
        return len(self._free)

    def occupied(self) -> list[int]:
        """Indices of all lanes currently held by a pending hash."""
        return [i for i, occupant in enumerate(self.lanes) if occupant is not None]

    def trim(self) -> None:
        """Drop free lanes from the end; gaps in the middle stay reusable."""
        while self.lanes and self.lanes[-1] is None:
            self.lanes.pop()


def compute_layout(
    commits: Sequence[Commit],
    palette: Sequence[str] = LANE_COLORS,
) -> list[GraphRow]:
    """
    Compute graph rows for a newest-first, topologically ordered commit list.

    Returns one GraphRow per commit, in the same order. The result depends only
    on the input; nothing is carried over between calls, so the whole list is
    laid out again whenever it changes (load, filter, or a page appended).

    Each commit lands in the lane that was already waiting for it, or in the
    lowest free lane if nobody was. Its primary parent continues in the same
    lane unless another lane is already waiting for that parent, and each
    merge parent either joins the lane waiting for it or opens a new lane.

    Malformed input is not rejected: out-of-order commits and parents that
    never show up just leave lanes open, which produces an incomplete graph.
    """
    arena = _LaneArena()
    rows: list[GraphRow] = []

    for commit in commits:
        column = arena.find(commit.hash)
        if column is None:
            column = arena.allocate()

        pass_through = tuple(
            PassThroughLane(lane, get_lane_color(lane, palette))
            for lane in arena.occupied()
            if lane != column
        )

        arena.vacate(column)
        parents = commit.parent_hashes
        if not parents or arena.find(parents[0]) is not None:
            # The primary parent won't take this lane back, so merge parents may
            arena.release(column)

        connections: list[Connection] = []
        for i, parent_hash in enumerate(commit.parent_hashes):
            parent_lane = arena.find(parent_hash)
            if parent_lane is not None:
                # Another lane already expects this parent: join it
                connections.append(
                    Connection(column, parent_lane, get_lane_color(parent_lane, palette))
                )
            elif i == 0:
                arena.occupy(column, parent_hash)
                connections.append(Connection(column, column, get_lane_color(column, palette)))
            else:
                new_lane = arena.allocate()
                arena.occupy(new_lane, parent_hash)
                connections.append(
                    Connection(column, new_lane, get_lane_color(new_lane, palette))
                )

        arena.trim()

        rows.append(
            GraphRow(
                column=column,
                color=get_lane_color(column, palette),
                num_columns=max(len(arena), column + 1),
                pass_through_lanes=pass_through,
                connections_down=tuple(connections),
            )
        )

    return rows


def max_columns(rows: Sequence[GraphRow]) -> int:
    """Widest row in lanes; at least 1 so an empty graph still gets a gutter."""
    return max((row.num_columns for row in rows), default=1)
