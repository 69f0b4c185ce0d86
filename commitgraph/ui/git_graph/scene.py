"""Commit graph scene - draws layout rows and the commit text beside them."""

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import (
    QGraphicsItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
    QStyleOptionGraphicsItem,
    QWidget,
)

from commitgraph.graph.geometry import Dot, GraphGeometry
from commitgraph.graph.history import CommitHistory
from commitgraph.graph.types import Commit
from commitgraph.ui.git_graph.edges import ConnectorEdge

BACKGROUND = QColor("#FAFAFA")
SELECTION = QColor("#E3F2FD")
TEXT_COLOR = QColor("#333333")
MUTED_TEXT = QColor("#888888")


class CommitDot(QGraphicsItem):
    """Ring-shaped commit marker with a small filled centre."""

    RING_WIDTH = 2.5
    CENTER_RADIUS = 2.0

    def __init__(self, dot: Dot, parent: QGraphicsItem | None = None) -> None:
        super().__init__(parent)
        self.dot = dot
        self.setPos(QPointF(*dot.center))

    def boundingRect(self) -> QRectF:  # noqa: N802
        r = self.dot.radius + self.RING_WIDTH
        return QRectF(-r, -r, 2 * r, 2 * r)

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionGraphicsItem,
        widget: QWidget | None = None,
    ) -> None:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        color = QColor(self.dot.color)
        r = self.dot.radius

        # Halo in the background color so lines stop short of the ring
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(BACKGROUND)
        painter.drawEllipse(QPointF(0, 0), r + 1, r + 1)

        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(color, self.RING_WIDTH))
        painter.drawEllipse(QPointF(0, 0), r, r)

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(color)
        painter.drawEllipse(QPointF(0, 0), self.CENTER_RADIUS, self.CENTER_RADIUS)


class CommitGraphScene(QGraphicsScene):
    """Scene with the lane graph on the left and one text line per commit."""

    TEXT_GAP = 8
    TEXT_WIDTH = 900

    commit_selected = Signal(str)  # hash

    def __init__(
        self,
        history: CommitHistory,
        geometry: GraphGeometry | None = None,
        font_size: int = 10,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.history = history
        self.geometry = geometry or GraphGeometry()
        self.font_size = font_size
        self.selected_hash: str | None = None
        self._selection_item: QGraphicsRectItem | None = None

        self.setBackgroundBrush(BACKGROUND)
        self.rebuild()

    def rebuild(self) -> None:
        """Redraw everything from the history's current rows."""
        self.clear()
        self._selection_item = None

        commits = self.history.commits
        rows = self.history.rows
        geometry = self.geometry
        gutter = geometry.graph_width(rows)

        # Edges first (behind dots)
        for stroke in geometry.graph_strokes(rows):
            self.addItem(ConnectorEdge(stroke))

        for dot in geometry.graph_dots(rows):
            self.addItem(CommitDot(dot))

        for index, commit in enumerate(commits):
            self._add_text_row(index, commit, gutter + self.TEXT_GAP)

        width = gutter + self.TEXT_GAP + self.TEXT_WIDTH
        height = max(geometry.graph_height(rows), geometry.row_height)
        self.setSceneRect(0, 0, width, height)

        if self.selected_hash is not None:
            self._highlight(self.selected_hash)

    def _add_text_row(self, index: int, commit: Commit, x: float) -> None:
        """Short hash, ref badges, subject, author and date on one line."""
        font = QFont()
        font.setPointSize(self.font_size)
        font.setBold(self.history.is_unpushed(commit.hash))

        parts = [commit.short_hash]
        parts.extend(f"[{ref}]" for ref in commit.refs)
        parts.append(commit.message.split("\n")[0])
        text = QGraphicsSimpleTextItem("  ".join(parts))
        text.setFont(font)
        text.setBrush(TEXT_COLOR)

        meta = QGraphicsSimpleTextItem(f"{commit.author}  {commit.date}".strip())
        meta_font = QFont(font)
        meta_font.setBold(False)
        meta.setFont(meta_font)
        meta.setBrush(MUTED_TEXT)

        cy = self.geometry.row_center(index)
        text.setPos(x, cy - text.boundingRect().height() / 2)
        meta_x = x + max(text.boundingRect().width() + self.TEXT_GAP * 2, self.TEXT_WIDTH * 0.6)
        meta.setPos(meta_x, cy - meta.boundingRect().height() / 2)
        self.addItem(text)
        self.addItem(meta)

    def _highlight(self, commit_hash: str) -> None:
        index = self.history.row_for(commit_hash)
        if self._selection_item is not None:
            self.removeItem(self._selection_item)
            self._selection_item = None
        if index is None:
            return
        rect = QRectF(0, self.geometry.row_top(index), self.sceneRect().width(), self.geometry.row_height)
        self._selection_item = self.addRect(rect, QPen(Qt.PenStyle.NoPen), QBrush(SELECTION))
        self._selection_item.setZValue(-2)

    def row_at(self, y: float) -> int | None:
        """Row index under a scene y coordinate."""
        if y < 0:
            return None
        index = int(y // self.geometry.row_height)
        if index >= len(self.history.commits):
            return None
        return index

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent) -> None:  # noqa: N802
        """Select the commit in the clicked row."""
        if event.button() == Qt.MouseButton.LeftButton:
            index = self.row_at(event.scenePos().y())
            if index is not None:
                commit_hash = self.history.commits[index].hash
                self.selected_hash = commit_hash
                self._highlight(commit_hash)
                self.commit_selected.emit(commit_hash)
                event.accept()
                return
        super().mousePressEvent(event)
