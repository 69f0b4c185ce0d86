#!/usr/bin/env python3
"""
commitgraph - commit history graph viewer
"""

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from commitgraph.config.settings import Settings
from commitgraph.graph.source import PagedCommitSource, load_commits_file
from commitgraph.ui.main_window import MainWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="commitgraph",
        description="commitgraph - view a commit history as a lane graph",
    )
    parser.add_argument(
        "commits",
        help="JSON file with a newest-first list of commits ('-' for stdin)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Commits per page (defaults to history.page_size from settings)",
    )
    parser.add_argument(
        "--unpushed",
        action="append",
        default=[],
        metavar="HASH",
        help="Mark a commit as not yet pushed (may be abbreviated, repeatable)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file to use instead of ~/.config/commitgraph/settings.json",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main() -> None:
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        commits = load_commits_file(args.commits)
    except (OSError, ValueError) as e:
        print(f"commitgraph: cannot load commits: {e}", file=sys.stderr)
        sys.exit(1)

    settings = Settings(args.settings)
    page_size = args.page_size if args.page_size is not None else settings.get_page_size()

    app = QApplication(sys.argv)
    app.setApplicationName("commitgraph")

    window = MainWindow(
        PagedCommitSource(commits, page_size),
        settings,
        unpushed_hashes=args.unpushed,
        title=f"commitgraph - {args.commits}",
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
