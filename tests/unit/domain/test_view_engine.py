"""Unit tests for the filter/sort engine."""

import pytest

from gridbase.domain.entities import ColumnType, Filter, FilterOperator, SortDirection, SortSpec
from gridbase.domain.services.view_engine import apply_filters, apply_sort, apply_view


@pytest.fixture
def columns(make_column):
    return [
        make_column("name", ColumnType.TEXT, 0),
        make_column("score", ColumnType.NUMBER, 1),
        make_column("due", ColumnType.DATE, 2),
    ]


@pytest.fixture
def rows(make_row):
    return [
        make_row("r1", name="Alpha", score=10, due="2024-03-01"),
        make_row("r2", name="beta", score="3", due="2024-01-15"),
        make_row("r3", name="", score=None),
        make_row("r4", name="Gamma", score=25, due="2023-12-31"),
    ]


def ids(rows):
    return [row.id for row in rows]


class TestApplyView:
    def test_no_filters_no_sort_is_identity(self, rows, columns):
        result = apply_view(rows, columns, [], SortSpec())
        assert ids(result) == ["r1", "r2", "r3", "r4"]

    def test_does_not_mutate_input(self, rows, columns):
        original = list(rows)
        apply_view(rows, columns, [Filter("score", FilterOperator.GREATER_THAN, "5")],
                   SortSpec("score", SortDirection.DESC))
        assert rows == original


class TestFilters:
    def test_contains_is_case_insensitive(self, rows, columns):
        result = apply_filters(rows, columns, [Filter("name", FilterOperator.CONTAINS, "A")])
        assert ids(result) == ["r1", "r2", "r4"]

    def test_equals_and_not_equals(self, rows, columns):
        equal = apply_filters(rows, columns, [Filter("name", FilterOperator.EQUALS, "BETA")])
        not_equal = apply_filters(rows, columns, [Filter("name", FilterOperator.NOT_EQUALS, "beta")])
        assert ids(equal) == ["r2"]
        assert ids(not_equal) == ["r1", "r3", "r4"]

    def test_empty_and_not_empty_partition_rows(self, rows, columns):
        empty = apply_filters(rows, columns, [Filter("name", FilterOperator.IS_EMPTY)])
        not_empty = apply_filters(rows, columns, [Filter("name", FilterOperator.IS_NOT_EMPTY)])
        assert ids(empty) == ["r3"]
        assert sorted(ids(empty) + ids(not_empty)) == ids(rows)

    def test_missing_key_counts_as_empty(self, rows, columns):
        result = apply_filters(rows, columns, [Filter("due", FilterOperator.IS_EMPTY)])
        assert ids(result) == ["r3"]

    def test_greater_than_coerces_strings(self, rows, columns):
        result = apply_filters(rows, columns, [Filter("score", FilterOperator.GREATER_THAN, "5")])
        assert ids(result) == ["r1", "r4"]

    def test_null_number_cell_reads_as_zero(self, rows, columns):
        below = apply_filters(rows, columns, [Filter("score", FilterOperator.LESS_THAN, "5")])
        assert ids(below) == ["r2", "r3"]

    def test_numeric_filters_exclude_missing_and_non_numeric(self, make_row, columns):
        rows = [make_row("a", score=None), make_row("b"), make_row("c", score="n/a")]
        below = apply_filters(rows, columns, [Filter("score", FilterOperator.LESS_THAN, "5")])
        assert ids(below) == ["a"]

    def test_non_numeric_filter_value_matches_nothing(self, rows, columns):
        result = apply_filters(rows, columns, [Filter("score", FilterOperator.GREATER_THAN, "abc")])
        assert result == []

    def test_filters_combine_with_and(self, rows, columns):
        result = apply_filters(
            rows,
            columns,
            [
                Filter("score", FilterOperator.GREATER_THAN, "5"),
                Filter("name", FilterOperator.CONTAINS, "gam"),
            ],
        )
        assert ids(result) == ["r4"]

    def test_filter_on_unknown_column_is_ignored(self, rows, columns):
        result = apply_filters(rows, columns, [Filter("gone", FilterOperator.EQUALS, "x")])
        assert ids(result) == ids(rows)


class TestSort:
    def test_number_ascending_and_descending(self, rows, columns):
        asc = apply_sort(rows, columns, SortSpec("score", SortDirection.ASC))
        desc = apply_sort(rows, columns, SortSpec("score", SortDirection.DESC))
        # missing score sorts as 0
        assert ids(asc) == ["r3", "r2", "r1", "r4"]
        assert ids(desc) == ["r4", "r1", "r2", "r3"]

    def test_text_sort_ignores_case(self, rows, columns):
        result = apply_sort(rows, columns, SortSpec("name"))
        assert ids(result) == ["r3", "r1", "r2", "r4"]

    def test_date_sort(self, rows, columns):
        result = apply_sort(rows, columns, SortSpec("due"))
        # unparsable/missing date sorts as the epoch
        assert ids(result) == ["r3", "r4", "r2", "r1"]

    def test_sort_is_stable_for_ties(self, make_row, columns):
        tied = [make_row("a", score=1), make_row("b", score=1), make_row("c", score=0)]
        asc = apply_sort(tied, columns, SortSpec("score", SortDirection.ASC))
        desc = apply_sort(tied, columns, SortSpec("score", SortDirection.DESC))
        assert ids(asc) == ["c", "a", "b"]
        assert ids(desc) == ["a", "b", "c"]

    def test_unknown_sort_column_keeps_order(self, rows, columns):
        result = apply_sort(rows, columns, SortSpec("gone", SortDirection.DESC))
        assert ids(result) == ids(rows)

    def test_sort_reads_value_under_current_type(self, make_column, make_row):
        # a text column converted to number is compared numerically
        rows = [make_row("a", v="10"), make_row("b", v="9")]
        as_text = apply_sort(rows, [make_column("v", ColumnType.TEXT)], SortSpec("v"))
        as_number = apply_sort(rows, [make_column("v", ColumnType.NUMBER)], SortSpec("v"))
        assert ids(as_text) == ["a", "b"]
        assert ids(as_number) == ["b", "a"]

    def test_number_sort_tolerates_huge_integers(self, make_column, make_row):
        rows = [make_row("a", n=10**400), make_row("b", n=-1)]
        result = apply_sort(rows, [make_column("n", ColumnType.NUMBER)], SortSpec("n"))
        assert ids(result) == ["b", "a"]
