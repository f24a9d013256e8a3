"""Tests for the sample workbook seed script."""

from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path

from openpyxl import load_workbook

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from seed_workbooks import MASTER_HEADERS, SOURCE_ROWS, build_master, build_source, seed  # noqa: E402

PERIOD = date(2026, 10, 15)


class TestBuildMaster:
    def test_tabs(self):
        assert build_master(PERIOD).sheetnames == ["master", "Germany", "France"]

    def test_header_layout(self):
        ws = build_master(PERIOD)["Germany"]
        assert ws.cell(row=1, column=13).value == "FX Rate"
        assert ws.cell(row=1, column=23).value == "Gross Pay (local)"
        assert ws.max_column == len(MASTER_HEADERS)

    def test_rows_are_dated_in_period(self):
        ws = build_master(PERIOD)["France"]
        assert ws.cell(row=2, column=2).value == "Claire Dubois"
        assert ws.cell(row=2, column=7).value.month == 10


class TestBuildSource:
    def test_one_row_per_entry(self):
        ws = build_source(PERIOD)["Sheet1"]
        assert ws.max_row == len(SOURCE_ROWS) + 1
        assert ws.cell(row=2, column=3).value == "2026-10"


def test_seed_writes_both_files(tmp_path):
    master_path, source_path = seed(tmp_path / "sample", PERIOD)
    assert master_path.exists() and source_path.exists()
    reloaded = load_workbook(master_path)
    assert isinstance(reloaded["Germany"].cell(row=2, column=7).value, datetime)
