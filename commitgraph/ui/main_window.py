"""Main window - filter box, commit graph and pagination."""

from collections.abc import Iterable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from commitgraph.config.settings import Settings
from commitgraph.graph.geometry import GraphGeometry
from commitgraph.graph.history import CommitHistory
from commitgraph.graph.source import PagedCommitSource
from commitgraph.ui.git_graph import CommitGraphView


class MainWindow(QMainWindow):
    """Window showing one commit history as a lane graph."""

    FILTER_DELAY_MS = 200

    def __init__(
        self,
        source: PagedCommitSource,
        settings: Settings,
        unpushed_hashes: Iterable[str] = (),
        title: str = "commitgraph",
    ) -> None:
        super().__init__()
        self.source = source
        self.settings = settings
        self.unpushed_hashes = tuple(unpushed_hashes)
        self.history = CommitHistory(settings.get_palette())

        self.setWindowTitle(title)
        self.resize(1100, 700)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        # Filter row
        top = QHBoxLayout()
        self._filter_edit = QLineEdit()
        self._filter_edit.setPlaceholderText("Filter by message, author, ref or hash")
        self._filter_edit.setClearButtonEnabled(True)
        top.addWidget(self._filter_edit, 1)
        self._branch_combo = QComboBox()
        self._branch_combo.setMinimumContentsLength(16)
        self._branch_combo.currentIndexChanged.connect(self._on_branch_changed)
        top.addWidget(self._branch_combo)
        self._status = QLabel()
        top.addWidget(self._status)
        layout.addLayout(top)

        self._view = CommitGraphView(
            self.history,
            GraphGeometry.from_settings(settings),
            int(settings.get("ui.font_size", 10)),
        )
        self._view.load_more_requested.connect(self.load_more)
        self._view.commit_selected.connect(self._on_commit_selected)
        layout.addWidget(self._view, 1)

        self._load_more_btn = QPushButton("Load more")
        self._load_more_btn.clicked.connect(self.load_more)
        layout.addWidget(self._load_more_btn)

        self.setCentralWidget(central)

        # Debounce typing so each keystroke doesn't trigger a relayout
        self._filter_timer = QTimer(self)
        self._filter_timer.setSingleShot(True)
        self._filter_timer.setInterval(self.FILTER_DELAY_MS)
        self._filter_timer.timeout.connect(self._apply_filter)
        self._filter_edit.textChanged.connect(lambda _text: self._filter_timer.start())

        self.reload()

    def reload(self) -> None:
        """Show the first page again."""
        self.source.reset()
        self.history.load_commits(
            self.source.next_page(),
            has_more=self.source.has_more,
            unpushed_hashes=self.unpushed_hashes,
        )
        self._refresh()

    def load_more(self) -> None:
        """Append the next page of older commits."""
        if not self.source.has_more:
            return
        self.history.load_commits(
            self.source.next_page(),
            append=True,
            has_more=self.source.has_more,
            unpushed_hashes=self.unpushed_hashes,
        )
        self._refresh()

    def _apply_filter(self) -> None:
        text = self._filter_edit.text()
        self.history.set_filter(text)
        self._refresh()
        # A hash prefix brings its commit into view
        match = self.history.find_by_prefix(text)
        if match is not None:
            self._view.scroll_to_commit(match)

    def _on_branch_changed(self, index: int) -> None:
        if index < 0:
            return
        ref = self._branch_combo.itemData(index)
        if ref == self.history.branch_filter:
            return
        self._filter_timer.stop()
        self._filter_edit.blockSignals(True)
        self._filter_edit.clear()
        self._filter_edit.blockSignals(False)
        self.history.set_branch_filter(ref)
        self._refresh()

    def _on_commit_selected(self, commit_hash: str) -> None:
        self.statusBar().showMessage(commit_hash)

    def _update_branches(self) -> None:
        """Refill the branch box from the refs of the loaded commits."""
        current = self.history.branch_filter
        self._branch_combo.blockSignals(True)
        self._branch_combo.clear()
        self._branch_combo.addItem("All branches", None)
        refs = self.history.available_refs()
        if current is not None and current not in refs:
            refs.append(current)
        for ref in refs:
            self._branch_combo.addItem(ref, ref)
        index = self._branch_combo.findData(current) if current is not None else 0
        self._branch_combo.setCurrentIndex(index)
        self._branch_combo.blockSignals(False)

    def _refresh(self) -> None:
        self._view.refresh()
        self._update_branches()
        shown = len(self.history.commits)
        total = len(self.history.all_commits)
        self._status.setText(f"{shown} of {total} commits" if shown != total else f"{total} commits")
        self._load_more_btn.setEnabled(self.history.has_more)
