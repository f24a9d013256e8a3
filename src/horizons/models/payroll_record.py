"""Source payroll records and per-employee burden aggregates.

The source export carries one row per employee per burden per period. Rows
are parsed into ``SourceRecord`` and summed into ``EmployeeAggregate``.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class BurdenCategory(StrEnum):
    """Burden categories the fixed variant knows how to place."""

    GROSS_INCOME = "Gross Income"
    EMPLOYER_SOCIAL_SECURITY = "Employer Social Security"
    EMPLOYER_PENSION = "Employer Pension"
    EMPLOYER_HEALTH_INSURANCE = "Employer Health Insurance"
    PAYROLL_TAX_SURCHARGE = "Payroll Tax Surcharge"
    OTHER = "Other"

    @classmethod
    def parse(cls, label: str) -> BurdenCategory:
        """Resolve a raw source label.

        Exact match first, then a whitespace/case-insensitive match (logged,
        since the source export should not need it). Anything else is OTHER.
        """
        try:
            return cls(label)
        except ValueError:
            pass
        normalized = " ".join(str(label).split()).casefold()
        for member in cls:
            if member is not cls.OTHER and member.value.casefold() == normalized:
                logger.warning("Burden label %r normalized to %r", label, member.value)
                return member
        return cls.OTHER


class SourceRecord(BaseModel):
    """Single raw row from the source payroll export."""

    employee_name: str
    burden: str
    amount: Decimal = Decimal("0")
    fx_rate: Optional[Decimal] = None
    pay_date: Optional[date] = None
    row_number: int = 0  # 1-based row in the source sheet

    model_config = {"str_strip_whitespace": True}


class EmployeeAggregate(BaseModel):
    """Summed burden amounts for one employee.

    ``totals`` is keyed by burden label (interactive variant) or by
    ``BurdenCategory`` value (fixed variant).
    """

    employee_name: str
    fx_rate: Optional[Decimal] = None
    totals: dict[str, Decimal] = Field(default_factory=dict)
    unrecognized: list[str] = Field(default_factory=list)

    def total(self, category: str) -> Decimal:
        return self.totals.get(str(category), Decimal("0"))

    def add(self, category: str, amount: Decimal) -> None:
        key = str(category)
        self.totals[key] = self.totals.get(key, Decimal("0")) + amount

    @property
    def grand_total(self) -> Decimal:
        return sum(self.totals.values(), Decimal("0"))
