"""Commit graph layout and drawing geometry."""

from commitgraph.graph.geometry import Dot, GraphGeometry, Stroke
from commitgraph.graph.history import CommitHistory
from commitgraph.graph.layout import compute_layout, max_columns
from commitgraph.graph.types import (
    Commit,
    Connection,
    GraphRow,
    PassThroughLane,
    get_lane_color,
)

__all__ = [
    "Commit",
    "CommitHistory",
    "Connection",
    "Dot",
    "GraphGeometry",
    "GraphRow",
    "PassThroughLane",
    "Stroke",
    "compute_layout",
    "get_lane_color",
    "max_columns",
]
