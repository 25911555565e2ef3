"""Typed contracts for the plot explorer state."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from config.charts import ChartConfig
from data.dataset import Dataset
from ui.charts.plot_spec import PlotSpecification


class LineStyle(str, Enum):
    """Line dash styles offered to the user."""

    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"


class ControllerStatus(str, Enum):
    """Idle until a dataset has been loaded, Ready afterwards."""

    IDLE = "idle"
    READY = "ready"


@dataclass(frozen=True)
class StyleOptions:
    """Presentation options applied to the whole plot."""

    title: str = ChartConfig.DEFAULT_TITLE
    x_label: str = ChartConfig.DEFAULT_X_LABEL
    y_label: str = ChartConfig.DEFAULT_Y_LABEL
    line_style: str = ChartConfig.DEFAULT_LINE_STYLE
    show_markers: bool = ChartConfig.DEFAULT_SHOW_MARKERS

    @classmethod
    def option_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_changes(self, **changes: Any) -> "StyleOptions":
        unknown = set(changes) - set(self.option_names())
        if unknown:
            raise ValueError(f"Unknown style option(s): {', '.join(sorted(unknown))}")
        if "line_style" in changes and isinstance(changes["line_style"], LineStyle):
            changes["line_style"] = changes["line_style"].value
        if "show_markers" in changes and not isinstance(changes["show_markers"], bool):
            raise ValueError(f"show_markers must be a bool, got {changes['show_markers']!r}")
        return replace(self, **changes)


@dataclass(frozen=True)
class PlotState:
    """Everything the controller owns; each transition returns a new instance."""

    dataset: Optional[Dataset] = None
    x_column: str = ""
    y_columns: Tuple[str, ...] = ()
    style: StyleOptions = field(default_factory=StyleOptions)
    color_map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    plot: PlotSpecification = field(default_factory=PlotSpecification)

    @property
    def status(self) -> ControllerStatus:
        return ControllerStatus.IDLE if self.dataset is None else ControllerStatus.READY

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.dataset.columns if self.dataset is not None else ()
