"""
Tests for default selection derivation and selection reconciliation.
"""
import pytest

from ui.state.column_registry import (
    derive_default_selections,
    reconcile,
    reconcile_with_defaults,
    unique_in_order,
)


class TestDeriveDefaultSelections:
    def test_two_or_more_columns(self):
        assert derive_default_selections(["year", "sales", "profit"]) == ("year", ("sales",))

    def test_single_column(self):
        assert derive_default_selections(["year"]) == ("year", ())

    def test_no_columns(self):
        assert derive_default_selections([]) == ("", ())


class TestReconcile:
    COLUMNS = ["year", "sales", "profit"]

    def test_valid_selections_are_untouched(self):
        assert reconcile(self.COLUMNS, "year", ["profit", "sales"]) == ("year", ("profit", "sales"))

    def test_removes_exactly_the_invalid_entries(self):
        x, y = reconcile(self.COLUMNS, "year", ["gone", "sales", "missing", "profit"])

        assert x == "year"
        assert y == ("sales", "profit")

    def test_invalid_x_is_dropped(self):
        assert reconcile(self.COLUMNS, "month", ["sales"]) == ("", ("sales",))

    def test_empty_x_stays_empty(self):
        assert reconcile(self.COLUMNS, "", ["sales"]) == ("", ("sales",))

    def test_against_empty_columns(self):
        assert reconcile([], "year", ["sales"]) == ("", ())

    @pytest.mark.parametrize(
        "x_column, y_columns",
        [("year", ["a", "sales"]), ("zzz", ["profit"]), ("sales", []), ("q", ["q", "year", "r"])],
    )
    def test_result_only_references_known_columns(self, x_column, y_columns):
        x, y = reconcile(self.COLUMNS, x_column, y_columns)

        assert x in self.COLUMNS or x == ""
        assert all(col in self.COLUMNS for col in y)
        assert list(y) == [col for col in y_columns if col in self.COLUMNS]


class TestReconcileWithDefaults:
    def test_dropped_x_is_rederived(self):
        assert reconcile_with_defaults(["year", "sales"], "month", ["sales"]) == ("year", ("sales",))

    def test_explicit_empty_x_is_kept(self):
        assert reconcile_with_defaults(["year", "sales"], "", ["sales"]) == ("", ("sales",))


def test_unique_in_order():
    assert unique_in_order(["b", "a", "b", "c", "a"]) == ("b", "a", "c")
