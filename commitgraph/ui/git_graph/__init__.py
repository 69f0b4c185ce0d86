"""Commit graph visualization components."""

from commitgraph.ui.git_graph.widget import CommitGraphView

__all__ = ["CommitGraphView"]
