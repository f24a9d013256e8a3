"""Turn aggregates, matched rows and a column mapping into cell updates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from horizons.models.payroll_record import EmployeeAggregate
from horizons.models.reconcile import ColumnMapping, MatchedEmployee, UpdateInstruction

logger = logging.getLogger(__name__)

FX_RATE_LABEL = "FX Rate"


def to_cell_value(amount: Decimal) -> int | float:
    """Decimal -> a number every spreadsheet backend accepts."""
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def plan_updates(
    aggregates: Mapping[str, EmployeeAggregate],
    targets: Iterable[MatchedEmployee],
    mapping: ColumnMapping,
    fx_rate_column: int | None = 13,
) -> list[UpdateInstruction]:
    """One FX-rate write plus one write per mapped non-zero burden, per target row.

    Targets must already be matched to the reporting period; nothing here
    creates rows.
    """
    instructions: list[UpdateInstruction] = []
    for target in targets:
        agg = aggregates.get(target.name)
        if agg is None:
            logger.info("No source data for %r; row %d on %r left as is",
                        target.name, target.row_index, target.sheet_name)
            continue
        if fx_rate_column is not None and agg.fx_rate is not None:
            instructions.append(
                UpdateInstruction(
                    sheet_name=target.sheet_name,
                    row=target.row_index,
                    column=fx_rate_column,
                    value=to_cell_value(agg.fx_rate),
                    employee_name=target.name,
                    label=FX_RATE_LABEL,
                )
            )
        for burden, total in agg.totals.items():
            if total == 0:
                continue
            column = mapping.column_for(burden)
            if column is None:
                continue
            instructions.append(
                UpdateInstruction(
                    sheet_name=target.sheet_name,
                    row=target.row_index,
                    column=column,
                    value=to_cell_value(total),
                    employee_name=target.name,
                    label=burden,
                )
            )
    return instructions
