"""Plot specification building and series color assignment."""

from .color_assigner import SeriesColorAssigner, normalize_color
from .plot_spec import LayoutSpec, PlotSpecification, SeriesSpec
from .spec_builder import PlotSpecBuilder

__all__ = [
    "LayoutSpec",
    "PlotSpecBuilder",
    "PlotSpecification",
    "SeriesColorAssigner",
    "SeriesSpec",
    "normalize_color",
]
