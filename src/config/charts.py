"""Chart configuration and color schemes."""

from typing import Dict

import plotly.express as px


class ChartConfig:
    """Chart styling and configuration."""

    # Default style options
    DEFAULT_TITLE = "Interactive Line Plot"
    DEFAULT_X_LABEL = "X-Axis"
    DEFAULT_Y_LABEL = "Y-Axis"
    DEFAULT_LINE_STYLE = "solid"
    DEFAULT_SHOW_MARKERS = True

    # Line style -> plotly dash pattern
    DASH_PATTERNS: Dict[str, str] = {"solid": "solid", "dashed": "dash", "dotted": "dot"}
    DEFAULT_DASH_PATTERN = "solid"

    MODE_LINES = "lines"
    MODE_LINES_MARKERS = "lines+markers"

    # Color schemes
    SERIES_COLOR_SEQUENCE = [color.lower() for color in px.colors.qualitative.Plotly]
    FALLBACK_SERIES_COLOR = "#000000"
    SAMPLE_SERIES_COLOR = "#4299e1"

    # Figure defaults
    TRACE_TYPE = "scatter"
    MARKER_SYMBOL = "circle"
    MARKER_SIZE = 8
    LAYOUT_DEFAULTS = {
        "hovermode": "closest",
        "autosize": True,
        "margin": {"l": 60, "r": 20, "t": 70, "b": 60},
    }
    FIGURE_CONFIG = {"displayModeBar": True, "responsive": True}

    PLACEHOLDER_MESSAGE = "Upload a file or select valid columns to display the plot."

    @classmethod
    def get_dash_pattern(cls, line_style: str) -> str:
        """Map a line style to its dash pattern, falling back to solid."""
        return cls.DASH_PATTERNS.get(getattr(line_style, "value", line_style), cls.DEFAULT_DASH_PATTERN)

    @classmethod
    def get_mode(cls, show_markers: bool) -> str:
        """Get the trace display mode for the marker toggle."""
        return cls.MODE_LINES_MARKERS if show_markers else cls.MODE_LINES
