"""Matcher: locate destination rows by employee name and reporting period."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any

from dateutil import parser

from horizons.core.config import MasterConfig
from horizons.core.types import Row
from horizons.models.reconcile import MatchedEmployee, ReportingPeriod

logger = logging.getLogger(__name__)

_SERIAL_EPOCH = date(1899, 12, 30)
_PARSE_DEFAULT = datetime(1900, 1, 1)
_MAX_SERIAL = 2958465  # 9999-12-31


def coerce_date(value: Any) -> date | None:
    """Best-effort conversion of a cell to a date; None when it is not one.

    Accepts native dates, spreadsheet serial day numbers and date strings.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        if 0 < value <= _MAX_SERIAL:
            return _SERIAL_EPOCH + timedelta(days=int(value))
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return parser.parse(text, default=_PARSE_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def _text(row: Row, index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _in_period(row: Row, index: int, period: ReportingPeriod) -> bool:
    if index >= len(row):
        return False
    value = coerce_date(row[index])
    return value is not None and period.contains(value)


def find_rows(
    rows: list[Row],
    employee_name: str,
    period: ReportingPeriod,
    columns: MasterConfig | None = None,
    allow_multiple: bool = True,
) -> list[int]:
    """1-based sheet rows for ``employee_name`` dated within ``period``.

    Row 1 is the header. Data index ``i`` in ``rows`` is sheet row ``i + 1``.
    Rows with unparseable dates never match. Returns an empty list when
    nothing matches.
    """
    columns = columns or MasterConfig()
    matches: list[int] = []
    for i in range(1, len(rows)):
        row = rows[i]
        if _text(row, columns.name_column) != employee_name:
            continue
        if not _in_period(row, columns.date_column, period):
            continue
        matches.append(i + 1)
        if not allow_multiple:
            break
    return matches


def collect_employees(
    rows: list[Row],
    sheet_name: str,
    period: ReportingPeriod,
    columns: MasterConfig | None = None,
) -> list[MatchedEmployee]:
    """Employees on a master tab whose code carries the payroll prefix and
    whose row is dated within ``period``."""
    columns = columns or MasterConfig()
    found: list[MatchedEmployee] = []
    for i in range(1, len(rows)):
        row = rows[i]
        name = _text(row, columns.name_column)
        code = _text(row, columns.code_column)
        if not name or not code.startswith(columns.code_prefix):
            continue
        if not _in_period(row, columns.date_column, period):
            continue
        found.append(MatchedEmployee(name=name, sheet_name=sheet_name, row_index=i + 1))
    logger.info("Found %d employee row(s) for %s on %r", len(found), period, sheet_name)
    return found
