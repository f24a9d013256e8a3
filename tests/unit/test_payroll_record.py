"""Tests for source record and aggregate models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from horizons.models.payroll_record import BurdenCategory, EmployeeAggregate, SourceRecord
from horizons.models.reconcile import ReportingPeriod, RunSummary, UpdateInstruction


def test_burden_category_exact_and_other():
    assert BurdenCategory.parse("Gross Income") is BurdenCategory.GROSS_INCOME
    assert BurdenCategory.parse("Payroll Tax Surcharge ") is BurdenCategory.PAYROLL_TAX_SURCHARGE
    assert BurdenCategory.parse("Gross Incom") is BurdenCategory.OTHER


def test_source_record_strips_whitespace():
    record = SourceRecord(employee_name=" Alice ", burden="Gross Income\t")
    assert record.employee_name == "Alice"
    assert record.burden == "Gross Income"
    assert record.amount == Decimal("0")


def test_aggregate_defaults_to_zero():
    agg = EmployeeAggregate(employee_name="Alice")
    agg.add(BurdenCategory.GROSS_INCOME, Decimal("10"))
    agg.add("Gross Income", Decimal("5"))
    assert agg.total(BurdenCategory.GROSS_INCOME) == Decimal("15")
    assert agg.total(BurdenCategory.EMPLOYER_PENSION) == Decimal("0")
    assert agg.grand_total == Decimal("15")


def test_reporting_period_contains():
    period = ReportingPeriod(month=10, year=2026)
    assert period.contains(date(2026, 10, 31))
    assert not period.contains(date(2025, 10, 31))
    assert str(period) == "2026-10"


def test_instruction_cell_label():
    instruction = UpdateInstruction(sheet_name="Germany", row=12, column=23, value=1)
    assert instruction.cell_label == "W12"
    assert instruction.model_copy(update={"column": 0}).cell_label == "R12C0"


def test_run_summary_message_lists_skipped():
    summary = RunSummary(succeeded=3, failed=1, skipped_employees=["Bob"])
    assert summary.message == "Payroll data updated: 3 cell(s) written, 1 failed. No matching row for: Bob."
    merged = summary.merge(RunSummary(succeeded=1))
    assert (merged.succeeded, merged.failed) == (4, 1)
