"""
Tabular Parser - converts raw CSV or JSON text into a Dataset.

CSV text is read with pandas, which infers column types (integers, floats,
booleans, strings) and treats empty fields as missing. JSON input must be a
non-empty array of flat objects. Parsing is pure: nothing is published until
the whole input has been validated.
"""
from __future__ import annotations

import io
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import pandas as pd

from config.settings import Settings

from .dataset import Dataset
from .errors import ErrorKind, ParseError

_SCALAR_TYPES = (str, int, float, bool, type(None))


class RowPolicy(str, Enum):
    """How CSV rows whose field count differs from the header are handled."""

    PAD = "pad"
    REJECT = "reject"


def normalize_format(declared_format: str) -> str:
    """Normalize a declared format ("CSV", ".json") or reject it."""
    fmt = (declared_format or "").strip().lower().lstrip(".")
    if fmt not in Settings.SUPPORTED_FORMATS.values():
        raise ParseError(ErrorKind.UNSUPPORTED_FORMAT, f"Unsupported file format '{declared_format}'")
    return fmt


def infer_format(filename: str) -> str:
    """Infer the declared format from a filename extension."""
    fmt = Settings.get_format_for_filename(filename)
    if fmt is None:
        raise ParseError(ErrorKind.UNSUPPORTED_FORMAT, f"Unsupported file type: '{Path(filename).name}'")
    return fmt


def decode_content(raw: Union[bytes, str], encoding: str = Settings.FILE_ENCODING) -> str:
    """Decode uploaded bytes; text passes through unchanged."""
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise ParseError(ErrorKind.INVALID_SYNTAX, f"File is not valid {encoding} text: {e.reason}") from e


class TabularParser:
    """Parser for the supported tabular formats."""

    def __init__(
        self,
        row_policy: Union[RowPolicy, str] = Settings.CSV_ROW_POLICY,
        delimiter: str = Settings.CSV_DELIMITER,
        logger_obj: Optional[logging.Logger] = None,
    ):
        self.row_policy = RowPolicy(row_policy)
        self.delimiter = delimiter
        self.logger = logger_obj or logging.getLogger("scientiflow.parser")

    def parse(self, raw_text: str, declared_format: str, source_name: str = "") -> Dataset:
        """
        Parse raw text in the declared format.

        Args:
            raw_text: Complete file content.
            declared_format: "csv" or "json".
            source_name: Optional label (usually the file name) kept on the dataset.

        Returns:
            The parsed Dataset; its ``columns`` are never empty.

        Raises:
            ParseError: unsupported-format, invalid-shape, invalid-syntax or malformed-row.
        """
        fmt = normalize_format(declared_format)
        if fmt == "csv":
            dataset = self.parse_csv(raw_text, source_name)
        else:
            dataset = self.parse_json(raw_text, source_name)
        self.logger.info(
            f"Parsed {fmt} '{source_name or '<text>'}': {len(dataset)} rows, {len(dataset.columns)} columns"
        )
        return dataset

    def parse_file(self, path: Path) -> Dataset:
        """Read and parse a file from disk, rejecting unknown extensions first."""
        path = Path(path)
        fmt = infer_format(path.name)
        return self.parse(decode_content(path.read_bytes()), fmt, source_name=path.name)

    def parse_csv(self, raw_text: str, source_name: str = "") -> Dataset:
        header_frame = self._read_csv(raw_text, header=None, nrows=1, dtype=object, keep_default_na=False)
        header = self._validate_header(header_frame)
        width = len(header)

        # Every field is kept as text here, so only padding leaves missing cells
        raw_frame = self._read_csv(
            raw_text,
            header=None,
            dtype=object,
            keep_default_na=False,
            on_bad_lines=self._surplus_handler(width),
        )
        padded_mask = raw_frame.iloc[1:].isna().any(axis=1).tolist()
        padded_rows = [position for position, padded in enumerate(padded_mask) if padded]
        if padded_rows and self.row_policy is RowPolicy.REJECT:
            found = int(raw_frame.iloc[padded_rows[0] + 1].notna().sum())
            raise ParseError(
                ErrorKind.MALFORMED_ROW,
                f"Data row {padded_rows[0] + 1} has {found} field(s) but the header defines {width}",
            )

        frame = self._read_csv(raw_text, header=0, index_col=False, usecols=list(range(width)))
        frame.columns = header

        if padded_rows:
            self.logger.warning(f"Padded {len(padded_rows)} short CSV row(s) with missing values")
        return Dataset.from_frame(frame, source_name=source_name, padded_rows=padded_rows)

    def parse_json(self, raw_text: str, source_name: str = "") -> Dataset:
        try:
            payload = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ParseError(ErrorKind.INVALID_SYNTAX, f"Invalid JSON: {e.msg}", line=e.lineno) from e
        return self.parse_records(payload, source_name)

    def parse_records(self, payload: Any, source_name: str = "") -> Dataset:
        """Validate already-decoded JSON-shaped data (a list of flat dicts)."""
        if not isinstance(payload, list):
            raise ParseError(ErrorKind.INVALID_SHAPE, "Expected a top-level array of objects")
        if not payload:
            raise ParseError(ErrorKind.INVALID_SHAPE, "Expected a non-empty array of objects")

        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                raise ParseError(
                    ErrorKind.INVALID_SHAPE,
                    f"Element {index} is a {type(record).__name__}, expected an object",
                )
            for key, value in record.items():
                if not isinstance(value, _SCALAR_TYPES):
                    raise ParseError(
                        ErrorKind.INVALID_SHAPE,
                        f"Field '{key}' of element {index} is not a scalar value",
                    )

        columns = list(payload[0].keys())
        if not columns:
            raise ParseError(ErrorKind.INVALID_SHAPE, "The first object has no fields")
        return Dataset.from_records(payload, columns, source_name=source_name)

    def _read_csv(self, raw_text: str, **kwargs: Any) -> pd.DataFrame:
        try:
            return pd.read_csv(
                io.StringIO(raw_text),
                sep=self.delimiter,
                engine="python",
                skip_blank_lines=True,
                **kwargs,
            )
        except pd.errors.EmptyDataError as e:
            raise ParseError(ErrorKind.INVALID_SHAPE, "CSV input has no header row") from e
        except pd.errors.ParserError as e:
            raise ParseError(ErrorKind.INVALID_SYNTAX, f"Could not read CSV input: {e}") from e

    def _surplus_handler(self, width: int) -> Callable[[List[str]], List[str]]:
        """Build the ``on_bad_lines`` callable for rows longer than the header."""

        def handle(fields: List[str]) -> List[str]:
            surplus = fields[width:]
            if self.row_policy is RowPolicy.REJECT or any(str(value).strip() for value in surplus):
                raise ParseError(
                    ErrorKind.MALFORMED_ROW,
                    f"Row starting with '{fields[0]}' has {len(fields)} fields but the header defines {width}",
                )
            return fields[:width]

        return handle

    @staticmethod
    def _validate_header(header_frame: pd.DataFrame) -> List[str]:
        if header_frame.empty:
            raise ParseError(ErrorKind.INVALID_SHAPE, "CSV input has no header row")
        seen = set()
        names = header_frame.iloc[0].tolist()
        for name in names:
            if pd.isna(name) or name == "":
                raise ParseError(ErrorKind.INVALID_SHAPE, "Header contains an empty column name", line=1)
            if name in seen:
                raise ParseError(ErrorKind.INVALID_SHAPE, f"Duplicate column name '{name}'", line=1)
            seen.add(name)
        return [str(name) for name in names]


def parse(raw_text: str, declared_format: str, source_name: str = "") -> Dataset:
    """Parse with the default policy; see TabularParser.parse."""
    return TabularParser().parse(raw_text, declared_format, source_name)
