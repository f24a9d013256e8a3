"""Writer: best-effort, per-cell overwrite batch."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from horizons.core.exceptions import HorizonsError, VerificationMismatch
from horizons.core.protocols import ITabularStore
from horizons.models.reconcile import RunSummary, UpdateInstruction, WriteOutcome
from horizons.reconcile.extractor import parse_amount

logger = logging.getLogger(__name__)


def values_match(expected: Any, actual: Any) -> bool:
    """Compare a written value with what the store reads back.

    Numbers compare numerically so ``150`` matches ``"150.00"`` or ``150.0``.
    """
    if isinstance(expected, (int, float, Decimal)) and not isinstance(expected, bool):
        return parse_amount(actual) == parse_amount(expected)
    return ("" if actual is None else str(actual)) == ("" if expected is None else str(expected))


class CellWriter:
    """Apply UpdateInstructions one at a time against an ITabularStore.

    A failing instruction (store error or read-back mismatch) is counted and
    logged; the rest of the batch still runs. There is no rollback.
    """

    def __init__(self, store: ITabularStore, *, verify: bool = True, log_prior: bool = True) -> None:
        self._store = store
        self._verify = verify
        self._log_prior = log_prior

    def apply_one(self, instruction: UpdateInstruction) -> WriteOutcome:
        sheet, row, col = instruction.sheet_name, instruction.row, instruction.column
        prior: Any = None
        try:
            if self._log_prior:
                prior = self._store.get_cell(sheet, row, col)
            self._store.set_cell(sheet, row, col, instruction.value)
            if self._verify:
                actual = self._store.get_cell(sheet, row, col)
                if not values_match(instruction.value, actual):
                    raise VerificationMismatch(sheet, instruction.cell_label, instruction.value, actual)
        except HorizonsError as exc:
            logger.error(
                "Failed to write %s for %r to %s!%s: %s",
                instruction.label or "value", instruction.employee_name,
                sheet, instruction.cell_label, exc,
            )
            return WriteOutcome(instruction=instruction, ok=False, prior_value=prior, error=str(exc))

        logger.info(
            "Set %s for %r at %s!%s: %r -> %r",
            instruction.label or "value", instruction.employee_name,
            sheet, instruction.cell_label, prior, instruction.value,
        )
        return WriteOutcome(instruction=instruction, ok=True, prior_value=prior)

    def apply(self, instructions: Iterable[UpdateInstruction]) -> RunSummary:
        summary = RunSummary()
        for instruction in instructions:
            outcome = self.apply_one(instruction)
            summary.outcomes.append(outcome)
            if outcome.ok:
                summary.succeeded += 1
            else:
                summary.failed += 1
        logger.info("Write batch finished: %d succeeded, %d failed", summary.succeeded, summary.failed)
        return summary
