"""
Settings management for commitgraph
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

from commitgraph.constants import (
    DEFAULT_PAGE_SIZE,
    DOT_RADIUS,
    GRAPH_LEFT_PAD,
    GUTTER_PADDING,
    LANE_COLORS,
    LANE_WIDTH,
    ROW_HEIGHT,
    SETTINGS_FILE,
)

logger = logging.getLogger(__name__)


class Settings:
    """Manages application settings"""

    DEFAULT_SETTINGS: dict[str, Any] = {
        "graph": {
            "lane_width": LANE_WIDTH,
            "row_height": ROW_HEIGHT,
            "dot_radius": DOT_RADIUS,
            "left_padding": GRAPH_LEFT_PAD,
            "gutter_padding": GUTTER_PADDING,
            "palette": list(LANE_COLORS),
        },
        "history": {"page_size": DEFAULT_PAGE_SIZE},
        "ui": {"font_size": 10},
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path(SETTINGS_FILE).expanduser()

        self.config_path = config_path
        self.settings: dict[str, Any] = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if not self.config_path.exists():
            return
        try:
            with open(self.config_path) as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.config_path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", self.config_path)
            return
        # Merge with defaults to handle new settings
        self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.row_height')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_palette(self) -> tuple[str, ...]:
        """Get the lane palette.

        Lane colors are picked by column modulo palette size, so the palette
        must have at least one entry. Anything else falls back to the built-in
        colors.
        """
        palette = self.get("graph.palette")
        if (
            isinstance(palette, list)
            and palette
            and all(isinstance(color, str) and color for color in palette)
        ):
            return tuple(palette)
        logger.warning("Invalid graph.palette %r, using default colors", palette)
        return LANE_COLORS

    def get_page_size(self) -> int:
        """Get how many commits to add per "Load more"."""
        try:
            size = int(self.get("history.page_size", DEFAULT_PAGE_SIZE))
        except (TypeError, ValueError):
            logger.warning("Invalid history.page_size, using %d", DEFAULT_PAGE_SIZE)
            return DEFAULT_PAGE_SIZE
        return max(1, size)  # At least 1
