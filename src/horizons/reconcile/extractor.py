"""Extractor: raw source rows -> per-employee burden totals."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from horizons.core.config import SourceConfig
from horizons.core.types import Row
from horizons.models.payroll_record import BurdenCategory, EmployeeAggregate, SourceRecord
from horizons.reconcile.matcher import coerce_date

logger = logging.getLogger(__name__)

_IGNORE_CHARS = (" ", "\u00a0", ",", "$", "€", "£")


def parse_amount(value: Any) -> Decimal:
    """Parse a cell into a Decimal amount; anything unparseable is zero.

    Handles thousands separators, currency symbols, accounting negatives
    ``(12.50)`` and trailing negatives ``12.50-``.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, (int, float, Decimal)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            return Decimal("0")
        return result if result.is_finite() else Decimal("0")

    text = str(value).strip()
    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative, text = True, text[1:-1]
    elif text.endswith("-"):
        negative, text = True, text[:-1]
    for ch in _IGNORE_CHARS:
        text = text.replace(ch, "")
    if not text:
        return Decimal("0")
    try:
        result = Decimal(text)
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return -result if negative else result


def _cell(row: Row, index: int | None) -> Any:
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def read_source_records(rows: list[Row], columns: SourceConfig | None = None) -> list[SourceRecord]:
    """Parse every data row (header row skipped) into SourceRecord."""
    columns = columns or SourceConfig()
    records: list[SourceRecord] = []
    for number, row in enumerate(rows[1:], start=2):
        fx_raw = _cell(row, columns.fx_rate_column)
        fx_rate = parse_amount(fx_raw) if _text(fx_raw) else None
        pay_date = None
        if columns.pay_date_column is not None:
            pay_date = coerce_date(_cell(row, columns.pay_date_column))
        records.append(
            SourceRecord(
                employee_name=_text(_cell(row, columns.employee_column)),
                burden=_text(_cell(row, columns.burden_column)),
                amount=parse_amount(_cell(row, columns.amount_column)),
                fx_rate=fx_rate if fx_rate else None,
                pay_date=pay_date,
                row_number=number,
            )
        )
    return records


def filter_relevant(records: Iterable[SourceRecord], employees: Collection[str]) -> list[SourceRecord]:
    """Rows for the target employees with a burden and a non-zero amount."""
    return [
        r for r in records
        if r.employee_name and r.employee_name in employees and r.burden and r.amount != 0
    ]


def distinct_burdens(records: Iterable[SourceRecord]) -> list[str]:
    """Distinct burden labels in first-seen order."""
    return list(dict.fromkeys(r.burden for r in records if r.burden))


def _accumulate(
    records: Iterable[SourceRecord],
    employees: Collection[str] | None,
    key: Callable[[SourceRecord, EmployeeAggregate], str | None],
) -> dict[str, EmployeeAggregate]:
    aggregates: dict[str, EmployeeAggregate] = {}
    for record in records:
        if not record.employee_name or not record.burden or record.amount == 0:
            continue
        if employees is not None and record.employee_name not in employees:
            continue
        agg = aggregates.get(record.employee_name)
        if agg is None:
            agg = aggregates[record.employee_name] = EmployeeAggregate(
                employee_name=record.employee_name
            )
        if record.fx_rate is not None:
            if agg.fx_rate is None:
                agg.fx_rate = record.fx_rate
            elif agg.fx_rate != record.fx_rate:
                logger.warning(
                    "Conflicting FX rate for %r on source row %d: keeping %s, ignoring %s",
                    record.employee_name, record.row_number, agg.fx_rate, record.fx_rate,
                )
        bucket = key(record, agg)
        if bucket is not None:
            agg.add(bucket, record.amount)
    return aggregates


def aggregate(
    records: Iterable[SourceRecord],
    employees: Collection[str] | None = None,
    allowed: Collection[str] | None = None,
) -> dict[str, EmployeeAggregate]:
    """Sum amounts per employee and burden label.

    ``allowed=None`` passes every distinct label through. Otherwise labels are
    compared by exact string equality and anything outside the allow-list is
    dropped (and logged).
    """
    dropped: set[str] = set()

    def by_label(record: SourceRecord, agg: EmployeeAggregate) -> str | None:
        if allowed is not None and record.burden not in allowed:
            dropped.add(record.burden)
            return None
        return record.burden

    result = _accumulate(records, employees, by_label)
    for label in sorted(dropped):
        logger.warning("Burden %r is not in the allow-list; its amounts were dropped", label)
    return result


def aggregate_by_category(
    records: Iterable[SourceRecord],
    employees: Collection[str] | None = None,
) -> dict[str, EmployeeAggregate]:
    """Sum amounts per employee into the closed BurdenCategory set.

    Unrecognized labels are summed under ``BurdenCategory.OTHER`` and listed on
    the aggregate so they are never silently lost.
    """

    def by_category(record: SourceRecord, agg: EmployeeAggregate) -> str:
        category = BurdenCategory.parse(record.burden)
        if category is BurdenCategory.OTHER and record.burden not in agg.unrecognized:
            agg.unrecognized.append(record.burden)
            logger.warning(
                "Unrecognized burden %r for %r counted as %s",
                record.burden, record.employee_name, BurdenCategory.OTHER.value,
            )
        return category.value

    return _accumulate(records, employees, by_category)
