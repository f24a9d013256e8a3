"""Tests for update planning and the per-cell writer."""

from __future__ import annotations

from decimal import Decimal

from horizons.models.payroll_record import EmployeeAggregate
from horizons.models.reconcile import ColumnMapping, MatchedEmployee, UpdateInstruction
from horizons.reconcile.planner import FX_RATE_LABEL, plan_updates, to_cell_value
from horizons.reconcile.writer import CellWriter, values_match
from tests.fakes import MemoryTabularStore
from tests.fakes.grids import MASTER_HEADER, master_row


def _store() -> MemoryTabularStore:
    return MemoryTabularStore({"Germany": [MASTER_HEADER, master_row("Alice", "2026-10-01")]})


def _instruction(column: int, value, row: int = 2) -> UpdateInstruction:
    return UpdateInstruction(sheet_name="Germany", row=row, column=column, value=value, employee_name="Alice")


class TestPlanUpdates:
    def test_fx_rate_and_mapped_burdens(self):
        aggregates = {
            "Alice": EmployeeAggregate(
                employee_name="Alice",
                fx_rate=Decimal("1.08"),
                totals={"Gross Income": Decimal("150"), "Meal Vouchers": Decimal("12"), "Refund": Decimal("0")},
            )
        }
        targets = [MatchedEmployee(name="Alice", sheet_name="Germany", row_index=2)]
        mapping = ColumnMapping(columns={"Gross Income": 23, "Refund": 24})
        plan = plan_updates(aggregates, targets, mapping, fx_rate_column=13)
        assert [(i.column, i.value, i.label) for i in plan] == [
            (13, 1.08, FX_RATE_LABEL),
            (23, 150, "Gross Income"),
        ]

    def test_targets_without_source_data_produce_nothing(self):
        targets = [MatchedEmployee(name="Bob", sheet_name="Germany", row_index=3)]
        assert plan_updates({}, targets, ColumnMapping(columns={"Gross Income": 23})) == []

    def test_to_cell_value(self):
        assert to_cell_value(Decimal("150.00")) == 150
        assert isinstance(to_cell_value(Decimal("150.00")), int)
        assert to_cell_value(Decimal("1200.50")) == 1200.5


class TestCellWriter:
    def test_writes_and_counts_success(self):
        store = _store()
        summary = CellWriter(store).apply([_instruction(23, 150)])
        assert (summary.succeeded, summary.failed) == (1, 0)
        assert store.get_cell("Germany", 2, 23) == 150
        assert summary.outcomes[0].prior_value == ""

    def test_failure_does_not_abort_batch(self):
        store = _store()
        store.failing_cells.add(("Germany", 2, 24))
        summary = CellWriter(store).apply([_instruction(23, 1), _instruction(24, 2), _instruction(25, 3)])
        assert (summary.succeeded, summary.failed) == (2, 1)
        assert store.get_cell("Germany", 2, 25) == 3
        assert "Simulated write failure" in summary.outcomes[1].error

    def test_invalid_column_is_a_counted_failure(self):
        store = _store()
        summary = CellWriter(store).apply([_instruction(0, 1), _instruction(23, 2)])
        assert (summary.succeeded, summary.failed) == (1, 1)

    def test_verification_mismatch_is_a_failure(self):
        store = _store()
        store.ignored_cells.add(("Germany", 2, 23))
        summary = CellWriter(store).apply([_instruction(23, 150)])
        assert (summary.succeeded, summary.failed) == (0, 1)
        assert "read back" in summary.outcomes[0].error

    def test_unverified_write_trusts_the_store(self):
        store = _store()
        store.ignored_cells.add(("Germany", 2, 23))
        summary = CellWriter(store, verify=False, log_prior=False).apply([_instruction(23, 150)])
        assert summary.succeeded == 1
        assert summary.outcomes[0].prior_value is None

    def test_reapplying_is_idempotent(self):
        store = _store()
        batch = [_instruction(13, 1.08), _instruction(23, 150)]
        first = CellWriter(store).apply(batch)
        second = CellWriter(store).apply(batch)
        assert (first.succeeded, first.failed) == (second.succeeded, second.failed) == (2, 0)
        assert store.get_cell("Germany", 2, 23) == 150
        assert second.outcomes[1].prior_value == 150


def test_values_match_numeric_and_text():
    assert values_match(150, "150.00")
    assert values_match(1.08, 1.08)
    assert not values_match(150, 149.99)
    assert values_match("x", "x")
    assert not values_match("x", None)
