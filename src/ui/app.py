from __future__ import annotations

# Standard Library Imports
import sys
from pathlib import Path

# Third-Party Imports
import streamlit as st

# Add the 'src' directory to sys.path
_CURRENT_FILE_DIR = Path(__file__).resolve().parent
_SRC_DIR = _CURRENT_FILE_DIR.parent

if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

# Local Application Imports
from core.dependencies import DependencyContainer
from ui.chart_renderer import ChartRenderer
from ui.state.session_manager import SessionStateManager

container = DependencyContainer(logger_name="scientiflow")
ui_logger = container.get_logger("scientiflow.ui")

st.set_page_config(
    page_title="ScientiFlow - Line Plot",
    layout="wide",
    initial_sidebar_state="expanded",
)

SessionStateManager.initialize_all_session_state(controller_factory=container.create_controller)

try:
    ChartRenderer(ui_logger).render_page()
except Exception as e:
    st.error(f"Error rendering the plot page: {e}")
    ui_logger.error(f"Error rendering the plot page: {e}", exc_info=True)
