"""Immutable tabular dataset backed by a pandas DataFrame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import pandas as pd

Scalar = Union[None, bool, int, float, str]
Row = Dict[str, Scalar]


def _missing_to_none(value: Any) -> Scalar:
    if value is None or value is pd.NA:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    return value


@dataclass(frozen=True, eq=False)
class Dataset:
    """Ordered rows of named scalar fields plus the ordered column list.

    The frame is stored with ``object`` dtype so every cell keeps the exact
    Python value produced at ingestion (ints stay ints next to missing values).
    Missing fields are held as ``None``.
    """

    frame: pd.DataFrame
    columns: Tuple[str, ...]
    source_name: str = ""
    padded_rows: Tuple[int, ...] = field(default=())

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Scalar]],
        columns: Sequence[str],
        source_name: str = "",
        padded_rows: Sequence[int] = (),
    ) -> "Dataset":
        """Build a dataset; fields absent from a record become None."""
        column_list = list(columns)
        rows = [[_missing_to_none(record.get(col)) for col in column_list] for record in records]
        frame = pd.DataFrame(rows, columns=column_list, dtype=object)
        return cls(
            frame=frame,
            columns=tuple(column_list),
            source_name=source_name,
            padded_rows=tuple(padded_rows),
        )

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        source_name: str = "",
        padded_rows: Sequence[int] = (),
    ) -> "Dataset":
        """Build a dataset from a typed frame; pandas missing markers become None."""
        records = frame.convert_dtypes().astype(object).to_dict("records")
        return cls.from_records(records, [str(col) for col in frame.columns], source_name, padded_rows)

    @classmethod
    def empty(cls) -> "Dataset":
        return cls(frame=pd.DataFrame(dtype=object), columns=())

    @property
    def is_empty(self) -> bool:
        return len(self.frame.index) == 0

    def __len__(self) -> int:
        return len(self.frame.index)

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def column_values(self, name: str) -> List[Scalar]:
        """Values of one column in row order; unknown columns read as all-None."""
        if not self.has_column(name):
            return [None] * len(self)
        return [_missing_to_none(value) for value in self.frame[name].tolist()]

    def rows(self) -> List[Row]:
        """Materialize the rows as plain dicts keyed by column name."""
        return [
            {col: _missing_to_none(value) for col, value in zip(self.columns, values)}
            for values in self.frame.itertuples(index=False, name=None)
        ]
