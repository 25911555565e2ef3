"""
Tests for configuration modules functionality.
"""
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from config.charts import ChartConfig
from config.settings import Settings
from ui.state.plot_state import LineStyle


class TestSettings:
    """Test Settings configuration class."""

    def test_project_root_detection(self):
        """Test automatic project root detection."""
        project_root = Settings.PROJECT_ROOT

        assert isinstance(project_root, Path)
        assert (project_root / "src").exists()

    def test_default_paths(self):
        """Test default path configurations."""
        assert str(Settings.DATA_DIR).endswith("data")
        assert str(Settings.LOGS_DIR).endswith("logs")
        assert Settings.LOGS_DIR.parent == Settings.PROJECT_ROOT

    def test_ensure_directories_creation(self, tmp_path):
        """Test directory creation functionality."""
        with patch.object(Settings, "DATA_DIR", tmp_path / "data"), \
             patch.object(Settings, "LOGS_DIR", tmp_path / "logs"):

            assert not Settings.DATA_DIR.exists()
            assert not Settings.LOGS_DIR.exists()

            Settings.ensure_directories()

            assert Settings.DATA_DIR.exists()
            assert Settings.LOGS_DIR.exists()

    @pytest.mark.parametrize(
        "filename, expected",
        [("data.csv", "csv"), ("DATA.JSON", "json"), ("archive.tar.json", "json"), ("sheet.xlsx", None), ("noext", None)],
    )
    def test_get_format_for_filename(self, filename, expected):
        """Test filename extension lookup."""
        assert Settings.get_format_for_filename(filename) == expected

    def test_ingestion_settings(self):
        """Test ingestion defaults."""
        assert Settings.CSV_DELIMITER == ","
        assert Settings.CSV_ROW_POLICY in ("pad", "reject")
        assert Settings.FILE_ENCODING == "utf-8-sig"

    def test_feature_flags(self):
        """Test feature flag configurations."""
        assert isinstance(Settings.STRICT_COLOR_RESOLUTION, bool)
        assert isinstance(Settings.LOAD_SAMPLE_ON_STARTUP, bool)


class TestChartConfig:
    """Test ChartConfig configuration class."""

    def test_series_palette(self):
        """Test the series palette holds distinct lowercase hex colors."""
        palette = ChartConfig.SERIES_COLOR_SEQUENCE

        assert len(palette) >= 10
        assert len(set(palette)) == len(palette)
        assert all(re.match(r"^#[0-9a-f]{6}$", color) for color in palette)

    def test_style_defaults(self):
        """Test default style options."""
        assert ChartConfig.DEFAULT_TITLE == "Interactive Line Plot"
        assert ChartConfig.DEFAULT_X_LABEL == "X-Axis"
        assert ChartConfig.DEFAULT_Y_LABEL == "Y-Axis"
        assert ChartConfig.DEFAULT_SHOW_MARKERS is True

    @pytest.mark.parametrize(
        "line_style, expected",
        [("solid", "solid"), ("dashed", "dash"), ("dotted", "dot"), (LineStyle.DASHED, "dash"), ("zigzag", "solid")],
    )
    def test_get_dash_pattern(self, line_style, expected):
        """Test line style to dash pattern mapping."""
        assert ChartConfig.get_dash_pattern(line_style) == expected

    def test_get_mode(self):
        """Test the marker toggle controls the trace mode."""
        assert ChartConfig.get_mode(True) == "lines+markers"
        assert ChartConfig.get_mode(False) == "lines"

    def test_layout_defaults(self):
        """Test figure layout defaults."""
        assert ChartConfig.LAYOUT_DEFAULTS["hovermode"] == "closest"
        assert ChartConfig.LAYOUT_DEFAULTS["margin"] == {"l": 60, "r": 20, "t": 70, "b": 60}
        assert ChartConfig.FIGURE_CONFIG["responsive"] is True
