"""Column selection defaults and reconciliation."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

Selections = Tuple[str, Tuple[str, ...]]


def derive_default_selections(columns: Sequence[str]) -> Selections:
    """First column on X, second column as the only Y series."""
    x_column = columns[0] if len(columns) > 0 else ""
    y_columns = (columns[1],) if len(columns) > 1 else ()
    return x_column, y_columns


def reconcile(columns: Sequence[str], x_column: str, y_columns: Iterable[str]) -> Selections:
    """Drop selections that reference columns not in ``columns``.

    An empty X stays empty. Valid Y ids keep their order.
    """
    valid = set(columns)
    reconciled_x = x_column if x_column in valid else ""
    reconciled_y = tuple(col for col in y_columns if col in valid)
    return reconciled_x, reconciled_y


def reconcile_with_defaults(columns: Sequence[str], x_column: str, y_columns: Iterable[str]) -> Selections:
    """Reconcile, re-deriving the default X when a non-empty X was dropped."""
    reconciled_x, reconciled_y = reconcile(columns, x_column, y_columns)
    if x_column and not reconciled_x:
        reconciled_x, _ = derive_default_selections(columns)
    return reconciled_x, reconciled_y


def unique_in_order(ids: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    ordered = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return tuple(ordered)
