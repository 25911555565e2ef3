"""
Chart Renderer - Streamlit controls bound to the plot controller, and the
PlotSpecification -> Plotly figure adapter.
"""

from __future__ import annotations

import logging
from typing import Optional

import plotly.graph_objects as go
import streamlit as st

from config.charts import ChartConfig
from data.errors import ParseError, format_error_for_ui
from data.tabular_parser import decode_content, infer_format
from ui.charts.plot_spec import PlotSpecification
from ui.state.plot_state import LineStyle
from ui.state.session_manager import SessionStateManager

_STYLE_WIDGETS = {
    "title": "widget_title",
    "x_label": "widget_x_label",
    "y_label": "widget_y_label",
    "line_style": "widget_line_style",
    "show_markers": "widget_show_markers",
}

_NAV_ITEMS = ["Dashboard", "Visualization", "Datasets", "Reports", "Settings"]


def build_figure(spec: PlotSpecification) -> go.Figure:
    """Convert a plot specification into a Plotly figure."""
    figure_dict = spec.to_dict()
    return go.Figure(data=figure_dict["data"], layout=figure_dict["layout"])


class ChartRenderer:
    """Renders the line plot page; every widget event maps to one controller operation."""

    def __init__(self, logger_obj: Optional[logging.Logger] = None):
        self.logger = logger_obj or logging.getLogger("scientiflow.ui")

    def render_page(self) -> None:
        self.render_sidebar()
        st.header("Line Plot")
        self.render_file_upload()
        if SessionStateManager.get_columns():
            self.render_column_selection()
        self.render_style_controls()
        self.render_color_pickers()
        self.render_plot()
        self.render_data_preview()

    def render_sidebar(self) -> None:
        st.sidebar.title("ScientiFlow")
        st.sidebar.caption("Data Visualization")
        st.sidebar.divider()
        for item in _NAV_ITEMS:
            st.sidebar.markdown(f"- {item}")
        st.sidebar.divider()
        st.sidebar.markdown("- Home")

    # ---- file upload ----

    def render_file_upload(self) -> None:
        uploaded = st.file_uploader(
            "Upload a CSV or JSON file", type=["csv", "json"], key="widget_upload"
        )
        if uploaded is None:
            return
        upload_id = getattr(uploaded, "file_id", None) or uploaded.name
        if upload_id == st.session_state.get("last_upload_id"):
            error_message = SessionStateManager.get_last_upload_error()
            if error_message:
                st.error(error_message)
            return
        self.handle_upload(uploaded.name, uploaded.getvalue(), upload_id=upload_id)

    def handle_upload(self, filename: str, content: bytes, upload_id: Optional[str] = None) -> bool:
        """Load an uploaded file; on failure the previous dataset stays active."""
        controller = SessionStateManager.get_controller()
        token = SessionStateManager.next_upload_token()
        try:
            declared_format = infer_format(filename)
            plot = controller.complete_load(token, decode_content(content), declared_format, source_name=filename)
        except ParseError as e:
            message = format_error_for_ui(e)
            self.logger.warning(f"Upload of '{filename}' rejected: {e}")
            SessionStateManager.set_upload_result(upload_id or filename, message)
            st.error(message)
            return False

        SessionStateManager.set_upload_result(upload_id or filename, None)
        if plot is None:
            return False
        SessionStateManager.sync_widgets_from_state()
        return True

    # ---- selections ----

    def render_column_selection(self) -> None:
        columns = SessionStateManager.get_columns()
        col_x, col_y = st.columns(2)
        with col_x:
            st.selectbox(
                "Select X-Axis:",
                options=[""] + columns,
                format_func=lambda col: col or "-- Select X Column --",
                key="widget_x_column",
                on_change=self.on_x_column_change,
            )
        with col_y:
            st.multiselect(
                "Select Y-Axis:",
                options=columns,
                key="widget_y_columns",
                on_change=self.on_y_columns_change,
            )

    def on_x_column_change(self) -> None:
        SessionStateManager.get_controller().set_x_column(st.session_state.get("widget_x_column", ""))
        SessionStateManager.sync_widgets_from_state()

    def on_y_columns_change(self) -> None:
        SessionStateManager.get_controller().set_y_columns(st.session_state.get("widget_y_columns", []))
        SessionStateManager.sync_widgets_from_state()

    # ---- style ----

    def render_style_controls(self) -> None:
        col_left, col_right = st.columns(2)
        with col_left:
            st.text_input("Plot Title", key=_STYLE_WIDGETS["title"],
                          on_change=self.on_style_change, args=("title",))
            st.text_input("X-Axis Label", key=_STYLE_WIDGETS["x_label"],
                          on_change=self.on_style_change, args=("x_label",))
            st.text_input("Y-Axis Label", key=_STYLE_WIDGETS["y_label"],
                          on_change=self.on_style_change, args=("y_label",))
        with col_right:
            st.selectbox(
                "Line Style",
                options=[style.value for style in LineStyle],
                format_func=str.capitalize,
                key=_STYLE_WIDGETS["line_style"],
                on_change=self.on_style_change,
                args=("line_style",),
            )
            st.checkbox("Show Markers", key=_STYLE_WIDGETS["show_markers"],
                        on_change=self.on_style_change, args=("show_markers",))

    def on_style_change(self, option: str) -> None:
        value = st.session_state.get(_STYLE_WIDGETS[option])
        SessionStateManager.get_controller().set_style_option(**{option: value})

    # ---- colors ----

    def render_color_pickers(self) -> None:
        state = SessionStateManager.get_state()
        for series_id in state.y_columns:
            key = SessionStateManager.color_widget_key(series_id)
            st.session_state[key] = state.color_map.get(series_id, ChartConfig.FALLBACK_SERIES_COLOR)
            st.color_picker(f"{series_id} Color:", key=key,
                            on_change=self.on_color_change, args=(series_id,))

    def on_color_change(self, series_id: str) -> None:
        color = st.session_state.get(SessionStateManager.color_widget_key(series_id))
        try:
            SessionStateManager.get_controller().override_color(series_id, color)
        except ValueError as e:
            self.logger.warning(f"Ignoring color change for '{series_id}': {e}")
            st.warning(str(e))

    # ---- output ----

    def render_plot(self) -> None:
        spec = SessionStateManager.get_plot()
        if spec.is_empty:
            st.info(ChartConfig.PLACEHOLDER_MESSAGE)
            return
        st.plotly_chart(build_figure(spec), use_container_width=True, config=ChartConfig.FIGURE_CONFIG)

    def render_data_preview(self, max_rows: int = 100) -> None:
        dataset = SessionStateManager.get_state().dataset
        if dataset is None or dataset.is_empty:
            return
        label = dataset.source_name or "dataset"
        with st.expander(f"Data preview: {label} ({len(dataset)} rows)"):
            st.dataframe(dataset.frame.head(max_rows), use_container_width=True)
            if dataset.padded_rows:
                st.caption(f"{len(dataset.padded_rows)} short row(s) were padded with missing values.")
