"""Edge rendering for the commit graph - lane lines and merge/fork curves."""

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QColor, QPainterPath, QPen
from PySide6.QtWidgets import QGraphicsItem, QGraphicsPathItem

from commitgraph.graph.geometry import Stroke


class ConnectorEdge(QGraphicsPathItem):
    """
    One stroke of the commit graph.

    COORDINATE SYSTEM NOTE:
    Newer commits are at the TOP (lower y), older ones further down, so every
    stroke runs downward from a commit toward its parent's lane. Strokes only
    span a single row; longer lines are made of the per-row pieces.
    """

    LINE_WIDTH = 2.0

    def __init__(self, stroke: Stroke, parent: QGraphicsItem | None = None) -> None:
        super().__init__(parent)
        self.stroke = stroke
        self._build_path()
        self._setup_style()

    def _build_path(self) -> None:
        """Straight segment, or a cubic curve between two lanes."""
        path = QPainterPath()
        path.moveTo(QPointF(*self.stroke.start))
        if self.stroke.control1 is not None and self.stroke.control2 is not None:
            path.cubicTo(
                QPointF(*self.stroke.control1),
                QPointF(*self.stroke.control2),
                QPointF(*self.stroke.end),
            )
        else:
            path.lineTo(QPointF(*self.stroke.end))
        self.setPath(path)

    def _setup_style(self) -> None:
        """Setup pen style."""
        pen = QPen(QColor(self.stroke.color), self.LINE_WIDTH)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        self.setPen(pen)
        self.setBrush(Qt.BrushStyle.NoBrush)

        # Draw behind commit dots
        self.setZValue(-1)
