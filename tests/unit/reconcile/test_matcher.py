"""Tests for destination row matching."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from horizons.models.reconcile import ReportingPeriod
from horizons.reconcile.matcher import coerce_date, collect_employees, find_rows
from tests.fakes.grids import MASTER_HEADER, master_row

OCT_2026 = ReportingPeriod(month=10, year=2026)


class TestCoerceDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (datetime(2026, 10, 3, 9, 30), date(2026, 10, 3)),
            (date(2026, 10, 3), date(2026, 10, 3)),
            ("2026-10-03", date(2026, 10, 3)),
            ("10/03/2026", date(2026, 10, 3)),
            ("Oct 3, 2026", date(2026, 10, 3)),
            (46298, date(2026, 10, 3)),
        ],
    )
    def test_accepts(self, value, expected):
        assert coerce_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "pending", True, -5])
    def test_rejects(self, value):
        assert coerce_date(value) is None


class TestFindRows:
    def test_returns_one_based_rows_in_period(self):
        rows = [
            MASTER_HEADER,
            master_row("Alice", datetime(2026, 10, 1)),
            master_row("Bob", datetime(2026, 10, 1)),
            master_row("Alice", "2026-10-20"),
        ]
        assert find_rows(rows, "Alice", OCT_2026) == [2, 4]

    def test_never_returns_rows_outside_period(self):
        rows = [
            MASTER_HEADER,
            master_row("Alice", datetime(2026, 9, 30)),
            master_row("Alice", datetime(2025, 10, 15)),
            master_row("Alice", datetime(2026, 11, 1)),
        ]
        assert find_rows(rows, "Alice", OCT_2026) == []

    def test_unparseable_dates_are_excluded(self):
        rows = [MASTER_HEADER, master_row("Alice", "TBD"), master_row("Alice", "")]
        assert find_rows(rows, "Alice", OCT_2026) == []

    def test_serial_dates_from_sheet(self):
        # 46091 = 2026-03-10, 46298.0 = 2026-10-03
        rows = [MASTER_HEADER, master_row("Alice", 46091), master_row("Alice", 46298.0)]
        assert find_rows(rows, "Alice", OCT_2026) == [3]
        assert find_rows(rows, "Alice", ReportingPeriod(month=3, year=2026)) == [2]

    def test_single_match_mode_returns_first(self):
        rows = [
            MASTER_HEADER,
            master_row("Alice", datetime(2026, 10, 1)),
            master_row("Alice", datetime(2026, 10, 15)),
        ]
        assert find_rows(rows, "Alice", OCT_2026, allow_multiple=False) == [2]

    def test_header_row_is_never_matched(self):
        header = list(MASTER_HEADER)
        header[1], header[6] = "Alice", "2026-10-01"
        assert find_rows([header], "Alice", OCT_2026) == []

    def test_short_rows_are_ignored(self):
        assert find_rows([MASTER_HEADER, ["DE", "Alice"]], "Alice", OCT_2026) == []


class TestCollectEmployees:
    def test_requires_code_prefix_and_period(self):
        rows = [
            MASTER_HEADER,
            master_row("Alice", datetime(2026, 10, 1)),
            master_row("Bob", datetime(2026, 10, 1), code="CTR-1"),
            master_row("Chloe", datetime(2026, 9, 1)),
            master_row("", datetime(2026, 10, 1)),
        ]
        found = collect_employees(rows, "Germany", OCT_2026)
        assert [(e.name, e.sheet_name, e.row_index) for e in found] == [("Alice", "Germany", 2)]
