"""Configuration management for ScientiFlow."""

from .charts import ChartConfig
from .settings import Settings

__all__ = ["Settings", "ChartConfig"]
