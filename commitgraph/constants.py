"""
Centralized constants for commitgraph.

Geometry defaults for the graph gutter and the lane palette. Settings can
override all of them; these are the values used when nothing is configured.
"""

# Graph gutter geometry (pixels)
LANE_WIDTH = 20
ROW_HEIGHT = 28
DOT_RADIUS = 5
GRAPH_LEFT_PAD = 4
GUTTER_PADDING = 12

# Colors for lanes, indexed by column modulo palette size
LANE_COLORS: tuple[str, ...] = (
    "#4CAF50",  # Green
    "#2196F3",  # Blue
    "#FF9800",  # Orange
    "#E91E63",  # Pink
    "#9C27B0",  # Purple
    "#00BCD4",  # Cyan
    "#FF5722",  # Deep orange
    "#8BC34A",  # Light green
    "#3F51B5",  # Indigo
    "#FFC107",  # Amber
)

# Pagination
DEFAULT_PAGE_SIZE = 200

# Settings location
SETTINGS_FILE = "~/.config/commitgraph/settings.json"
