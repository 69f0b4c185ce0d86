"""Commit history model - the commit list behind the graph view."""

import logging
from collections.abc import Iterable, Sequence

from commitgraph.constants import LANE_COLORS
from commitgraph.graph.layout import compute_layout, max_columns
from commitgraph.graph.types import Commit, GraphRow

logger = logging.getLogger(__name__)


class CommitHistory:
    """
    Holds the commits currently known to the view and their layout.

    The host delivers commits in pages: the first page replaces whatever was
    shown, later pages are appended below (older history). A text filter
    narrows the list to matching commits, and a branch filter to the commits
    reachable from one ref. Any change produces a new list object, and the
    layout is recomputed from scratch for it; as long as the visible list
    object stays the same, the cached rows are returned.
    """

    def __init__(self, palette: Sequence[str] = LANE_COLORS) -> None:
        self.palette = tuple(palette)
        self.has_more = False
        self._all_commits: list[Commit] = []
        self._filter_text = ""
        self._branch_filter: str | None = None
        self._visible: list[Commit] = []
        self._unpushed: frozenset[str] = frozenset()
        self._index: dict[str, int] = {}

        # Layout memo, keyed on the identity of the list it was computed for
        self._layout_source: list[Commit] | None = None
        self._rows: list[GraphRow] = []

    @property
    def commits(self) -> list[Commit]:
        """The visible (filtered) commit list."""
        return self._visible

    @property
    def all_commits(self) -> list[Commit]:
        return self._all_commits

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @property
    def branch_filter(self) -> str | None:
        return self._branch_filter

    def load_commits(
        self,
        commits: Iterable[Commit],
        append: bool = False,
        has_more: bool = False,
        unpushed_hashes: Iterable[str] = (),
    ) -> None:
        """Replace the commit list, or append an older page to it."""
        page = list(commits)
        if append:
            self._all_commits = self._all_commits + page
        else:
            self._all_commits = page
        self.has_more = has_more
        self._unpushed = frozenset(h for h in unpushed_hashes if h)
        self._apply_filter()

    def set_filter(self, text: str) -> None:
        """Show only commits matching text (case-insensitive). Empty shows all."""
        text = text.strip()
        if text == self._filter_text:
            return
        self._filter_text = text
        self._apply_filter()

    def set_branch_filter(self, ref: str | None) -> None:
        """
        Show only the history of one ref, like `git log <ref>`.

        The visible list becomes the commits reachable through parent links
        from the commit(s) carrying ref. A ref nobody carries shows nothing.
        Switching branch clears the text filter. None shows all branches.
        """
        self._branch_filter = ref or None
        self._filter_text = ""
        self._apply_filter()

    def available_refs(self) -> list[str]:
        """Ref names on the loaded commits, in first-seen (newest-first) order."""
        seen: dict[str, None] = {}
        for commit in self._all_commits:
            for ref in commit.refs:
                for name in _ref_names(ref):
                    seen.setdefault(name)
        return list(seen)

    def find_by_prefix(self, prefix: str) -> str | None:
        """Hash of the first visible commit whose hash starts with prefix."""
        prefix = prefix.strip().lower()
        if not prefix:
            return None
        for commit in self._visible:
            if commit.hash.lower().startswith(prefix):
                return commit.hash
        return None

    def _apply_filter(self) -> None:
        commits = self._all_commits
        if self._branch_filter is not None:
            reachable = self._reachable_from(self._branch_filter)
            commits = [c for c in commits if c.hash in reachable]
        needle = self._filter_text.lower()
        if needle:
            self._visible = [c for c in commits if _matches(c, needle)]
        else:
            self._visible = list(commits)
        self._index = {c.hash: i for i, c in enumerate(self._visible)}

    def _reachable_from(self, ref: str) -> set[str]:
        by_hash = {c.hash: c for c in self._all_commits}
        stack = [c.hash for c in self._all_commits if any(ref in _ref_names(r) for r in c.refs)]
        reachable: set[str] = set()
        while stack:
            commit_hash = stack.pop()
            if commit_hash in reachable:
                continue
            reachable.add(commit_hash)
            commit = by_hash.get(commit_hash)
            if commit is not None:
                stack.extend(commit.parent_hashes)
        return reachable

    @property
    def rows(self) -> list[GraphRow]:
        """Layout rows for the visible commits, recomputed only when the list changed."""
        if self._layout_source is not self._visible:
            logger.debug("Computing graph layout for %d commits", len(self._visible))
            self._rows = compute_layout(self._visible, self.palette)
            self._layout_source = self._visible
        return self._rows

    @property
    def max_columns(self) -> int:
        return max_columns(self.rows)

    def row_for(self, commit_hash: str) -> int | None:
        """Index of a commit in the visible list."""
        return self._index.get(commit_hash)

    def is_unpushed(self, commit_hash: str) -> bool:
        """
        Check a commit against the unpushed set.

        The host may send abbreviated hashes, so a match on common prefix in
        either direction counts.
        """
        if not commit_hash:
            return False
        if commit_hash in self._unpushed:
            return True
        return any(
            commit_hash.startswith(unpushed) or unpushed.startswith(commit_hash)
            for unpushed in self._unpushed
        )


def _matches(commit: Commit, needle: str) -> bool:
    if needle in commit.message.lower() or needle in commit.author.lower():
        return True
    if commit.hash.lower().startswith(needle):
        return True
    return any(needle in ref.lower() for ref in commit.refs)


def _ref_names(ref: str) -> tuple[str, ...]:
    # "HEAD -> main" decorates two names
    return tuple(part.strip() for part in ref.split("->") if part.strip())
