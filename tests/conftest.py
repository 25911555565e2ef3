# tests/conftest.py
import os
import random
import sys
from unittest import mock
from unittest.mock import MagicMock

import pytest

# 1. Make sure `src/` is on the import path:
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, os.path.join(ROOT, "src"))

from data.tabular_parser import TabularParser  # noqa: E402
from ui.charts.color_assigner import SeriesColorAssigner  # noqa: E402
from ui.charts.spec_builder import PlotSpecBuilder  # noqa: E402
from ui.state.controller import ReactiveController  # noqa: E402

SALES_CSV = "year,sales\n2000,100\n2001,120\n"
SALES_JSON = '[{"year": 2000, "sales": 100}, {"year": 2001, "sales": 120}]'
WIDE_CSV = "year,sales_us,sales_eu,profit\n2000,100,80,20\n2001,120,90,25\n2002,150,110,30\n"


class SessionState(dict):
    """dict with attribute access, like st.session_state."""

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def sales_csv():
    return SALES_CSV


@pytest.fixture
def sales_json():
    return SALES_JSON


@pytest.fixture
def wide_csv():
    return WIDE_CSV


@pytest.fixture
def mock_logger():
    """Provide a mock logger with assertion helpers."""
    logger = MagicMock()

    # Track all log calls
    logger._calls = {
        "debug": [],
        "info": [],
        "warning": [],
        "error": [],
        "critical": [],
    }

    def make_log_method(level):
        def log_method(msg, *args, **kwargs):
            logger._calls[level].append(str(msg))

        return log_method

    logger.debug = make_log_method("debug")
    logger.info = make_log_method("info")
    logger.warning = make_log_method("warning")
    logger.error = make_log_method("error")
    logger.critical = make_log_method("critical")

    def assert_logged(level, substring):
        messages = logger._calls.get(level, [])
        assert any(substring in msg for msg in messages), (
            f"'{substring}' not found in {level} logs: {messages}"
        )

    logger.assert_logged = assert_logged

    return logger


@pytest.fixture
def parser(mock_logger):
    return TabularParser(logger_obj=mock_logger)


@pytest.fixture
def color_assigner(mock_logger):
    return SeriesColorAssigner(rng=random.Random(1234), logger_obj=mock_logger)


@pytest.fixture
def strict_builder(mock_logger):
    return PlotSpecBuilder(strict=True, logger_obj=mock_logger)


@pytest.fixture
def controller(parser, color_assigner, strict_builder, mock_logger):
    """Controller that fails loudly if a color is missing at build time."""
    return ReactiveController(
        parser=parser,
        color_assigner=color_assigner,
        spec_builder=strict_builder,
        logger_obj=mock_logger,
    )


@pytest.fixture
def mock_streamlit():
    """Patch the streamlit module used by the page and session helpers."""
    mock_st = MagicMock()
    mock_st.session_state = SessionState()
    mock_st.columns.side_effect = lambda spec: [MagicMock() for _ in range(spec if isinstance(spec, int) else len(spec))]

    with mock.patch("ui.state.session_manager.st", mock_st), mock.patch("ui.chart_renderer.st", mock_st):
        yield mock_st
