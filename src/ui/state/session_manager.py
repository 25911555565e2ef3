"""
Centralized session state management for the Streamlit page.

The ReactiveController lives in ``st.session_state`` so it survives reruns;
widget values are mirrored under their own keys and pushed into the
controller from ``on_change`` callbacks.
"""

from typing import Any, Callable, Dict, List, Optional, Union

import streamlit as st

from config.settings import Settings
from ui.charts.plot_spec import PlotSpecification
from ui.state.controller import ReactiveController
from ui.state.plot_state import PlotState


class SessionStateManager:
    """Manages Streamlit session state with type-safe accessors."""

    CONTROLLER_KEY = "plot_controller"

    UPLOAD_KEYS: Dict[str, Union[None, str, int]] = {
        "last_upload_id": None,
        "last_upload_error": None,
        "upload_token": 0,
    }

    WIDGET_KEYS: Dict[str, Union[str, bool, Callable]] = {
        "widget_x_column": "",
        "widget_y_columns": lambda: [],
    }

    @classmethod
    def initialize_all_session_state(
        cls, controller_factory: Optional[Callable[[], ReactiveController]] = None
    ) -> None:
        """Initialize the controller and widget keys with their defaults."""
        if cls.CONTROLLER_KEY not in st.session_state:
            controller = controller_factory() if controller_factory else ReactiveController()
            if Settings.LOAD_SAMPLE_ON_STARTUP:
                controller.load_sample()
            st.session_state[cls.CONTROLLER_KEY] = controller
            cls.sync_widgets_from_state()

        for key, default_value in {**cls.UPLOAD_KEYS, **cls.WIDGET_KEYS}.items():
            if key not in st.session_state:
                st.session_state[key] = default_value() if callable(default_value) else default_value

    @classmethod
    def sync_widgets_from_state(cls) -> None:
        """Copy the controller's selections and style into the widget keys."""
        state = cls.get_state()
        st.session_state["widget_x_column"] = state.x_column
        st.session_state["widget_y_columns"] = list(state.y_columns)
        st.session_state["widget_title"] = state.style.title
        st.session_state["widget_x_label"] = state.style.x_label
        st.session_state["widget_y_label"] = state.style.y_label
        st.session_state["widget_line_style"] = state.style.line_style
        st.session_state["widget_show_markers"] = state.style.show_markers
        for series_id, color in state.color_map.items():
            st.session_state[cls.color_widget_key(series_id)] = color

    # Type-safe getters
    @classmethod
    def get_controller(cls) -> ReactiveController:
        """Get the session's controller."""
        return st.session_state[cls.CONTROLLER_KEY]

    @classmethod
    def get_state(cls) -> PlotState:
        return cls.get_controller().state

    @classmethod
    def get_plot(cls) -> PlotSpecification:
        return cls.get_controller().plot

    @classmethod
    def get_columns(cls) -> List[str]:
        return list(cls.get_state().columns)

    @classmethod
    def get_last_upload_error(cls) -> Optional[str]:
        return st.session_state.get("last_upload_error")

    @staticmethod
    def color_widget_key(series_id: str) -> str:
        return f"widget_color__{series_id}"

    # Type-safe setters
    @classmethod
    def next_upload_token(cls) -> int:
        token = cls.get_controller().begin_load()
        st.session_state.upload_token = token
        return token

    @classmethod
    def set_upload_result(cls, upload_id: Any, error_message: Optional[str]) -> None:
        st.session_state.last_upload_id = upload_id
        st.session_state.last_upload_error = error_message
