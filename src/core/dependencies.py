"""Dependency injection container for the application."""

from typing import Optional
import logging

from config.settings import Settings
from data.tabular_parser import TabularParser
from ui.charts.color_assigner import SeriesColorAssigner
from ui.charts.spec_builder import PlotSpecBuilder
from ui.state.controller import ReactiveController
from utils.logger_setup import setup_logging


class DependencyContainer:
    """Container for managing application dependencies."""

    def __init__(
        self,
        logger_name: str = "scientiflow",
        strict_colors: Optional[bool] = None,
        file_logging: bool = True,
        console_output: bool = True,
    ):
        if file_logging:
            Settings.ensure_directories()
        self.logger = setup_logging(logger_name, console_output=console_output, file_output=file_logging)
        self.strict_colors = strict_colors

        # Initialize services
        self._parser: Optional[TabularParser] = None

    @property
    def parser(self) -> TabularParser:
        """Get or create the shared parser."""
        if self._parser is None:
            self._parser = TabularParser(logger_obj=self.get_logger(f"{self.logger.name}.parser"))
        return self._parser

    def create_controller(self) -> ReactiveController:
        """Create a controller; each session owns its own."""
        return ReactiveController(
            parser=self.parser,
            color_assigner=SeriesColorAssigner(logger_obj=self.get_logger(f"{self.logger.name}.colors")),
            spec_builder=PlotSpecBuilder(
                strict=self.strict_colors, logger_obj=self.get_logger(f"{self.logger.name}.spec_builder")
            ),
            logger_obj=self.get_logger(f"{self.logger.name}.controller"),
        )

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a logger instance."""
        if name:
            return logging.getLogger(name)
        return self.logger
