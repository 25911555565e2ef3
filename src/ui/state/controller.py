"""
Reactive controller for the plot explorer.

Every external event maps to one named operation. Each operation derives the
next PlotState from the current one through PlotTransitions, re-resolves
colors, rebuilds the PlotSpecification from scratch and publishes it to the
registered listeners. There is no partial update path.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from data.dataset import Dataset
from data.errors import ParseError
from data.sample_data import SAMPLE_RECORDS, SAMPLE_SOURCE_NAME
from data.tabular_parser import TabularParser
from config.charts import ChartConfig
from ui.charts.color_assigner import SeriesColorAssigner
from ui.charts.plot_spec import PlotSpecification
from ui.charts.spec_builder import PlotSpecBuilder

from .column_registry import derive_default_selections, reconcile_with_defaults, unique_in_order
from .plot_state import ControllerStatus, PlotState

PlotListener = Callable[[PlotSpecification], None]


class PlotTransitions:
    """Pure state transitions: each method takes a PlotState and returns a new one."""

    def __init__(self, color_assigner: SeriesColorAssigner, spec_builder: PlotSpecBuilder):
        self.color_assigner = color_assigner
        self.spec_builder = spec_builder

    def recompute(self, state: PlotState) -> PlotState:
        """Resolve colors, then build the plot specification."""
        color_map = self.color_assigner.resolve(state.y_columns, state.color_map)
        plot = self.spec_builder.build(state.dataset, state.x_column, state.y_columns, color_map, state.style)
        return replace(state, color_map=MappingProxyType(color_map), plot=plot)

    def load_dataset(
        self, state: PlotState, dataset: Dataset, seed_colors: Optional[Mapping[str, str]] = None
    ) -> PlotState:
        """Replace the dataset, derive default selections and clear the color map."""
        x_column, y_columns = derive_default_selections(dataset.columns)
        next_state = replace(
            state,
            dataset=dataset,
            x_column=x_column,
            y_columns=y_columns,
            color_map=dict(seed_colors or {}),
        )
        return self.recompute(next_state)

    def set_x_column(self, state: PlotState, x_column: str) -> PlotState:
        x_column, y_columns = reconcile_with_defaults(state.columns, x_column or "", state.y_columns)
        return self.recompute(replace(state, x_column=x_column, y_columns=y_columns))

    def set_y_columns(self, state: PlotState, y_columns: Iterable[str]) -> PlotState:
        x_column, y_columns = reconcile_with_defaults(state.columns, state.x_column, unique_in_order(y_columns))
        return self.recompute(replace(state, x_column=x_column, y_columns=y_columns))

    def set_style_option(self, state: PlotState, **changes: Any) -> PlotState:
        return self.recompute(replace(state, style=state.style.with_changes(**changes)))

    def override_color(self, state: PlotState, series_id: str, color: str) -> PlotState:
        color_map = self.color_assigner.override(state.color_map, series_id, color)
        return self.recompute(replace(state, color_map=color_map))


class ReactiveController:
    """Owns the PlotState and publishes a fresh PlotSpecification after every operation.

    File loads carry a monotonically increasing request token; a completion
    whose token is older than the latest ``begin_load`` is discarded.
    """

    def __init__(
        self,
        parser: Optional[TabularParser] = None,
        color_assigner: Optional[SeriesColorAssigner] = None,
        spec_builder: Optional[PlotSpecBuilder] = None,
        logger_obj: Optional[logging.Logger] = None,
        state: Optional[PlotState] = None,
    ):
        self.logger = logger_obj or logging.getLogger("scientiflow.controller")
        self.parser = parser or TabularParser(logger_obj=self.logger)
        self.transitions = PlotTransitions(
            color_assigner or SeriesColorAssigner(logger_obj=self.logger),
            spec_builder or PlotSpecBuilder(logger_obj=self.logger),
        )
        self._state = state or PlotState()
        self._latest_token = 0
        self._listeners: List[PlotListener] = []

    # ---- read access ----

    @property
    def state(self) -> PlotState:
        return self._state

    @property
    def plot(self) -> PlotSpecification:
        return self._state.plot

    @property
    def status(self) -> ControllerStatus:
        return self._state.status

    @property
    def color_map(self) -> Dict[str, str]:
        return dict(self._state.color_map)

    def subscribe(self, listener: PlotListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- dataset loading ----

    def begin_load(self) -> int:
        """Start a load request and return its token."""
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def complete_load(
        self, token: int, raw_text: str, declared_format: str, source_name: str = ""
    ) -> Optional[PlotSpecification]:
        """Parse and apply a load; returns None if a newer load superseded it.

        Raises:
            ParseError: the prior state is left untouched.
        """
        if not self.is_current(token):
            self.logger.warning(f"Discarding superseded load #{token} (latest is #{self._latest_token})")
            return None
        try:
            dataset = self.parser.parse(raw_text, declared_format, source_name=source_name)
        except ParseError as e:
            self.logger.error(f"Failed to load '{source_name or declared_format}': {e}", exc_info=True)
            raise
        return self._apply_dataset(dataset)

    def load_dataset(self, raw_text: str, declared_format: str, source_name: str = "") -> PlotSpecification:
        return self.complete_load(self.begin_load(), raw_text, declared_format, source_name)

    def load_file(self, path: Path) -> PlotSpecification:
        self.begin_load()
        try:
            dataset = self.parser.parse_file(path)
        except ParseError as e:
            self.logger.error(f"Failed to load file '{path}': {e}", exc_info=True)
            raise
        return self._apply_dataset(dataset)

    def load_records(self, records: Any, source_name: str = "") -> PlotSpecification:
        """Load already-decoded JSON-shaped records."""
        self.begin_load()
        dataset = self.parser.parse_records(records, source_name=source_name)
        return self._apply_dataset(dataset)

    def load_sample(self) -> PlotSpecification:
        """Load the built-in sales dataset with its first series pre-colored."""
        self.begin_load()
        dataset = self.parser.parse_records(SAMPLE_RECORDS, source_name=SAMPLE_SOURCE_NAME)
        _, default_y = derive_default_selections(dataset.columns)
        seed = {series_id: ChartConfig.SAMPLE_SERIES_COLOR for series_id in default_y}
        return self._commit(self.transitions.load_dataset(self._state, dataset, seed_colors=seed), "load_sample")

    # ---- selection and style ----

    def set_x_column(self, x_column: str) -> PlotSpecification:
        return self._commit(self.transitions.set_x_column(self._state, x_column), "set_x_column")

    def set_y_columns(self, y_columns: Iterable[str]) -> PlotSpecification:
        return self._commit(self.transitions.set_y_columns(self._state, y_columns), "set_y_columns")

    def set_style_option(self, **changes: Any) -> PlotSpecification:
        return self._commit(self.transitions.set_style_option(self._state, **changes), "set_style_option")

    def override_color(self, series_id: str, color: str) -> PlotSpecification:
        return self._commit(self.transitions.override_color(self._state, series_id, color), "override_color")

    # ---- internals ----

    def _apply_dataset(self, dataset: Dataset) -> PlotSpecification:
        return self._commit(self.transitions.load_dataset(self._state, dataset), "load_dataset")

    def _commit(self, next_state: PlotState, operation: str) -> PlotSpecification:
        self._state = next_state
        self.logger.info(
            f"{operation}: status={next_state.status.value} x='{next_state.x_column}' "
            f"y={list(next_state.y_columns)} series={len(next_state.plot.series)}"
        )
        for listener in list(self._listeners):
            listener(next_state.plot)
        return next_state.plot
