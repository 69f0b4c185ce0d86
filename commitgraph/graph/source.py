"""
Paged commit source backed by a JSON file.

Stands in for the history host: it hands out commits page by page, newest
first, the way a log command with skip/limit would.
"""

import json
import logging
import sys
from pathlib import Path

from commitgraph.graph.types import Commit

logger = logging.getLogger(__name__)


def load_commits_file(path: str) -> list[Commit]:
    """Read a JSON array of commit records ("-" reads stdin).

    Raises OSError if the file can't be read and ValueError if it isn't a
    list of commit objects.
    """
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(Path(path), encoding="utf-8") as f:
            data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of commits")

    commits = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"{path}: entry {i} is not an object")
        try:
            commits.append(Commit.from_dict(record))
        except KeyError as e:
            raise ValueError(f"{path}: entry {i} is missing {e}") from e
    logger.debug("Loaded %d commits from %s", len(commits), path)
    return commits


class PagedCommitSource:
    """Serves a fixed commit list in pages."""

    def __init__(self, commits: list[Commit], page_size: int) -> None:
        self.commits = commits
        self.page_size = max(1, page_size)
        self._offset = 0

    @property
    def has_more(self) -> bool:
        return self._offset < len(self.commits)

    def reset(self) -> None:
        self._offset = 0

    def next_page(self) -> list[Commit]:
        """Return the next page of older commits (empty when exhausted)."""
        page = self.commits[self._offset : self._offset + self.page_size]
        self._offset += len(page)
        return page
