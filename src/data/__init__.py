"""Data layer: tabular ingestion and the dataset model."""

from .dataset import Dataset
from .errors import ErrorKind, MissingColorError, ParseError
from .tabular_parser import RowPolicy, TabularParser, infer_format, parse

__all__ = [
    "Dataset",
    "ErrorKind",
    "MissingColorError",
    "ParseError",
    "RowPolicy",
    "TabularParser",
    "infer_format",
    "parse",
]
