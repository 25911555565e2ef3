"""Stable per-series color assignment.

Colors are handed out the first time a series identifier is seen and then
never change unless the user overrides them or the map is cleared by a new
dataset. Identifiers that are deselected keep their entry, so reselecting a
series within the same dataset brings back its previous color.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set

from config.charts import ChartConfig

ColorMap = Dict[str, str]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_MAX_RANDOM_ATTEMPTS = 64


def normalize_color(color: str) -> str:
    """Validate a hex RGB color and return it as lowercase ``#rrggbb``."""
    if not isinstance(color, str) or not _HEX_COLOR.match(color.strip()):
        raise ValueError(f"Invalid color '{color}': expected a hex RGB string such as '#1f77b4'")
    value = color.strip().lower()
    if len(value) == 4:
        value = "#" + "".join(ch * 2 for ch in value[1:])
    return value


class SeriesColorAssigner:
    """Resolves colors for selected series against an existing color map.

    The palette is consumed in order, skipping colors already in use; once it
    is exhausted colors are drawn uniformly from the full 24-bit RGB space.
    """

    def __init__(
        self,
        palette: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
        logger_obj: Optional[logging.Logger] = None,
    ):
        source = ChartConfig.SERIES_COLOR_SEQUENCE if palette is None else palette
        self.palette = [normalize_color(c) for c in source]
        self._rng = rng or random.Random()
        self.logger = logger_obj or logging.getLogger("scientiflow.colors")

    def resolve(self, y_columns: Iterable[str], existing: Mapping[str, str]) -> ColorMap:
        """Return a new map covering every id in ``y_columns``; existing entries are kept."""
        color_map: ColorMap = dict(existing)
        used = {color.lower() for color in color_map.values()}
        for series_id in y_columns:
            if series_id in color_map:
                continue
            color = self._next_color(used)
            color_map[series_id] = color
            used.add(color)
            self.logger.debug(f"Assigned color {color} to series '{series_id}'")
        return color_map

    def random_color(self, used: Set[str]) -> str:
        color = f"#{self._rng.randrange(0x1000000):06x}"
        attempts = 1
        while color in used and attempts < _MAX_RANDOM_ATTEMPTS:
            color = f"#{self._rng.randrange(0x1000000):06x}"
            attempts += 1
        return color

    def _next_color(self, used: Set[str]) -> str:
        for color in self.palette:
            if color not in used:
                return color
        return self.random_color(used)

    @staticmethod
    def override(color_map: Mapping[str, str], series_id: str, color: str) -> ColorMap:
        """Return a copy of ``color_map`` with one entry set to the user's color."""
        updated: ColorMap = dict(color_map)
        updated[series_id] = normalize_color(color)
        return updated
