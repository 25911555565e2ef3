"""Plot specification builder.

Projects the dataset through the selected X column and each selected Y
column. Colors must already be resolved; see SeriesColorAssigner.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from config.charts import ChartConfig
from config.settings import Settings
from data.dataset import Dataset
from data.errors import MissingColorError

from .plot_spec import LayoutSpec, PlotSpecification, SeriesSpec

if TYPE_CHECKING:
    from ui.state.plot_state import StyleOptions


class PlotSpecBuilder:
    """Builds PlotSpecification values; holds no state between calls.

    In strict mode a series without a resolved color raises
    MissingColorError. Otherwise the fallback color is used and a warning
    is logged.
    """

    def __init__(self, strict: Optional[bool] = None, logger_obj: Optional[logging.Logger] = None):
        self.strict = Settings.STRICT_COLOR_RESOLUTION if strict is None else strict
        self.logger = logger_obj or logging.getLogger("scientiflow.spec_builder")

    def build(
        self,
        dataset: Optional[Dataset],
        x_column: str,
        y_columns: Sequence[str],
        color_map: Mapping[str, str],
        style: StyleOptions,
    ) -> PlotSpecification:
        layout = self.build_layout(style)
        if dataset is None or dataset.is_empty or not x_column or not y_columns:
            return PlotSpecification(series=(), layout=layout)

        x_values = dataset.column_values(x_column)
        mode = ChartConfig.get_mode(style.show_markers)
        dash = ChartConfig.get_dash_pattern(style.line_style)

        series = []
        for series_id in y_columns:
            series.append(
                SeriesSpec(
                    identifier=series_id,
                    points=tuple(zip(x_values, dataset.column_values(series_id))),
                    mode=mode,
                    dash=dash,
                    color=self._color_for(series_id, color_map),
                )
            )
        return PlotSpecification(series=tuple(series), layout=layout)

    @staticmethod
    def build_layout(style: StyleOptions) -> LayoutSpec:
        return LayoutSpec(title=style.title, x_label=style.x_label, y_label=style.y_label)

    def _color_for(self, series_id: str, color_map: Mapping[str, str]) -> str:
        color = color_map.get(series_id)
        if color:
            return color
        if self.strict:
            raise MissingColorError(series_id)
        self.logger.warning(
            f"No color resolved for series '{series_id}', using {ChartConfig.FALLBACK_SERIES_COLOR}"
        )
        return ChartConfig.FALLBACK_SERIES_COLOR
