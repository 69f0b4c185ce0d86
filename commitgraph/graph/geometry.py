"""
Drawing geometry for commit graph rows.

Turns GraphRows into plain strokes and dots in pixel coordinates so that any
painter can render them. Rows are stacked top to bottom; row i spans
[i * row_height, (i + 1) * row_height) and its dot sits at the vertical centre.

Connections are drawn from a row's dot down to the top edge of the next row.
The next row continues them: either as a pass-through lane or as the incoming
stub into its own dot.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from commitgraph.constants import (
    DOT_RADIUS,
    GRAPH_LEFT_PAD,
    GUTTER_PADDING,
    LANE_WIDTH,
    ROW_HEIGHT,
)
from commitgraph.graph.layout import max_columns
from commitgraph.graph.types import GraphRow

if TYPE_CHECKING:
    from commitgraph.config.settings import Settings

Point = tuple[float, float]

# Where the bezier control points sit, as fractions of the row height
CURVE_LEAVE = 0.4
CURVE_ARRIVE = 0.3


@dataclass(frozen=True)
class Stroke:
    """A line segment, or a cubic curve when both control points are set."""

    start: Point
    end: Point
    color: str
    control1: Point | None = None
    control2: Point | None = None

    @property
    def is_curve(self) -> bool:
        return self.control1 is not None and self.control2 is not None


@dataclass(frozen=True)
class Dot:
    center: Point
    radius: float
    color: str


@dataclass(frozen=True)
class GraphGeometry:
    """Pixel sizes of the graph gutter."""

    lane_width: float = LANE_WIDTH
    row_height: float = ROW_HEIGHT
    dot_radius: float = DOT_RADIUS
    left_padding: float = GRAPH_LEFT_PAD
    gutter_padding: float = GUTTER_PADDING

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GraphGeometry":
        return cls(
            lane_width=float(settings.get("graph.lane_width", LANE_WIDTH)),
            row_height=float(settings.get("graph.row_height", ROW_HEIGHT)),
            dot_radius=float(settings.get("graph.dot_radius", DOT_RADIUS)),
            left_padding=float(settings.get("graph.left_padding", GRAPH_LEFT_PAD)),
            gutter_padding=float(settings.get("graph.gutter_padding", GUTTER_PADDING)),
        )

    def lane_x(self, column: int) -> float:
        """Horizontal centre of a lane."""
        return column * self.lane_width + self.lane_width / 2 + self.left_padding

    def row_top(self, index: int) -> float:
        return index * self.row_height

    def row_center(self, index: int) -> float:
        return index * self.row_height + self.row_height / 2

    def graph_width(self, rows: Sequence[GraphRow]) -> float:
        """Width to reserve for the graph before the text columns start."""
        return max_columns(rows) * self.lane_width + self.gutter_padding

    def graph_height(self, rows: Sequence[GraphRow]) -> float:
        return len(rows) * self.row_height

    def row_strokes(self, rows: Sequence[GraphRow], index: int) -> list[Stroke]:
        """Strokes for one row, in drawing order."""
        row = rows[index]
        top = self.row_top(index)
        bottom = top + self.row_height
        cy = self.row_center(index)
        cx = self.lane_x(row.column)
        strokes: list[Stroke] = []

        for lane in row.pass_through_lanes:
            x = self.lane_x(lane.column)
            strokes.append(Stroke((x, top), (x, bottom), lane.color))

        if index > 0 and _has_incoming(rows[index - 1], row.column):
            strokes.append(Stroke((cx, top), (cx, cy), row.color))

        for conn in row.connections_down:
            fx = self.lane_x(conn.from_column)
            tx = self.lane_x(conn.to_column)
            if conn.is_straight:
                strokes.append(Stroke((fx, cy), (tx, bottom), conn.color))
            else:
                strokes.append(
                    Stroke(
                        (fx, cy),
                        (tx, bottom),
                        conn.color,
                        control1=(fx, cy + self.row_height * CURVE_LEAVE),
                        control2=(tx, bottom - self.row_height * CURVE_ARRIVE),
                    )
                )

        return strokes

    def row_dot(self, rows: Sequence[GraphRow], index: int) -> Dot:
        row = rows[index]
        return Dot((self.lane_x(row.column), self.row_center(index)), self.dot_radius, row.color)

    def graph_strokes(self, rows: Sequence[GraphRow]) -> Iterator[Stroke]:
        for index in range(len(rows)):
            yield from self.row_strokes(rows, index)

    def graph_dots(self, rows: Sequence[GraphRow]) -> Iterator[Dot]:
        for index in range(len(rows)):
            yield self.row_dot(rows, index)


def _has_incoming(previous: GraphRow, column: int) -> bool:
    """Whether the row above draws a line that ends in this column."""
    return any(c.to_column == column for c in previous.connections_down) or any(
        lane.column == column for lane in previous.pass_through_lanes
    )
