"""Error handling and categorization for dataset ingestion."""

import json
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Categories of ingestion and plot-building errors."""
    UNSUPPORTED_FORMAT = "unsupported-format"
    INVALID_SHAPE = "invalid-shape"
    INVALID_SYNTAX = "invalid-syntax"
    MALFORMED_ROW = "malformed-row"
    MISSING_COLOR = "missing-color"


class ParseError(Exception):
    """Raised when raw file content cannot be turned into a dataset."""

    def __init__(self, kind: ErrorKind, message: str, line: Optional[int] = None):
        self.kind = ErrorKind(kind)
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        location = f" (line {self.line})" if self.line is not None else ""
        return f"[{self.kind.value}] {self.message}{location}"


class MissingColorError(ParseError):
    """Raised when a series is built before its color was resolved."""

    def __init__(self, series_id: str):
        self.series_id = series_id
        super().__init__(ErrorKind.MISSING_COLOR, f"No color resolved for series '{series_id}'")


def categorize_error(exception: Exception) -> ErrorKind:
    """Categorize an exception raised while loading a file."""
    if isinstance(exception, ParseError):
        return exception.kind
    elif isinstance(exception, (json.JSONDecodeError, UnicodeDecodeError)):
        return ErrorKind.INVALID_SYNTAX
    elif isinstance(exception, (TypeError, ValueError)):
        return ErrorKind.INVALID_SHAPE
    else:
        return ErrorKind.INVALID_SYNTAX


_UI_HINTS = {
    ErrorKind.UNSUPPORTED_FORMAT: "Please upload a .csv or .json file.",
    ErrorKind.INVALID_SHAPE: "JSON files must contain a non-empty array of flat objects.",
    ErrorKind.INVALID_SYNTAX: "The file could not be decoded.",
    ErrorKind.MALFORMED_ROW: "Every CSV row must match the header's field count.",
    ErrorKind.MISSING_COLOR: "Series colors were not resolved before plotting.",
}


def format_error_for_ui(exception: Exception) -> str:
    """Render an ingestion error as a user-facing message."""
    kind = categorize_error(exception)
    if isinstance(exception, ParseError):
        detail = exception.message
        if exception.line is not None:
            detail = f"{detail} (line {exception.line})"
    else:
        detail = str(exception)
    return f"Error parsing file: {detail}. {_UI_HINTS[kind]}"
