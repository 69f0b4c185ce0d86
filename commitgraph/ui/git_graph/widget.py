"""Commit graph view widget - main entry point for graph visualization."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QGraphicsView, QWidget

from commitgraph.graph.geometry import GraphGeometry
from commitgraph.graph.history import CommitHistory
from commitgraph.ui.git_graph.scene import CommitGraphScene


class CommitGraphView(QGraphicsView):
    """Scrollable view of the commit graph.

    Asks for the next page of history when scrolled to the bottom.
    """

    commit_selected = Signal(str)  # hash
    load_more_requested = Signal()

    def __init__(
        self,
        history: CommitHistory,
        geometry: GraphGeometry | None = None,
        font_size: int = 10,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.history = history

        self._scene = CommitGraphScene(history, geometry, font_size)
        self._scene.commit_selected.connect(self.commit_selected.emit)
        self.setScene(self._scene)

        # Avoid asking twice for the same page while it is loading
        self._load_pending = False

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self.verticalScrollBar().valueChanged.connect(self._on_scrolled)

    def refresh(self) -> None:
        """Redraw after the history changed (load, filter or appended page)."""
        self._load_pending = False
        self._scene.rebuild()

    def _on_scrolled(self, value: int) -> None:
        bar = self.verticalScrollBar()
        if value < bar.maximum() or self._load_pending:
            return
        if self.history.has_more:
            self._load_pending = True
            self.load_more_requested.emit()

    def scroll_to_commit(self, commit_hash: str) -> None:
        """Center the view on a commit's row."""
        index = self.history.row_for(commit_hash)
        if index is None:
            return
        geometry = self._scene.geometry
        self.centerOn(0, geometry.row_center(index))
