"""Matching, mapping and write models."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field

from horizons.reconcile.columns import column_number_to_letter


class ReportingPeriod(BaseModel):
    """Calendar month (1-12) and year a run reconciles."""

    month: int = Field(ge=1, le=12)
    year: int

    @classmethod
    def current(cls, today: date | None = None) -> ReportingPeriod:
        today = today or date.today()
        return cls(month=today.month, year=today.year)

    def contains(self, value: date) -> bool:
        return value.month == self.month and value.year == self.year

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class MatchedEmployee(BaseModel):
    """Employee row discovered in a selected master tab."""

    name: str
    sheet_name: str
    row_index: int  # 1-based sheet row


class MasterHeader(BaseModel):
    """Master header label and its 1-based column."""

    name: str
    column_index: int

    @property
    def letter(self) -> str:
        return column_number_to_letter(self.column_index)


class ColumnMapping(BaseModel):
    """Burden label -> 1-based master column.

    Skipped burdens are absent from ``columns``. ``unresolved`` keeps labels the
    user picked that no longer exist in the master header row.
    """

    columns: dict[str, int] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
    unresolved: dict[str, str] = Field(default_factory=dict)

    def column_for(self, burden: str) -> Optional[int]:
        return self.columns.get(burden)


class UpdateInstruction(BaseModel):
    """One cell overwrite."""

    sheet_name: str
    row: int
    column: int
    value: Any
    employee_name: str = ""
    label: str = ""  # burden label or "FX Rate"

    @property
    def cell_label(self) -> str:
        if self.column < 1:
            return f"R{self.row}C{self.column}"
        return f"{column_number_to_letter(self.column)}{self.row}"


class WriteOutcome(BaseModel):
    """Result of applying a single UpdateInstruction."""

    instruction: UpdateInstruction
    ok: bool
    prior_value: Any = None
    error: str = ""


class RunSummary(BaseModel):
    """Counts reported back to the user at the end of a run."""

    succeeded: int = 0
    failed: int = 0
    skipped_employees: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    outcomes: list[WriteOutcome] = Field(default_factory=list)

    def merge(self, other: RunSummary) -> RunSummary:
        return RunSummary(
            succeeded=self.succeeded + other.succeeded,
            failed=self.failed + other.failed,
            skipped_employees=self.skipped_employees + other.skipped_employees,
            warnings=self.warnings + other.warnings,
            outcomes=self.outcomes + other.outcomes,
        )

    @property
    def message(self) -> str:
        text = f"Payroll data updated: {self.succeeded} cell(s) written, {self.failed} failed."
        if self.skipped_employees:
            text += f" No matching row for: {', '.join(self.skipped_employees)}."
        return text


class PromptResponse(BaseModel):
    """Button pressed and text entered in a modal prompt."""

    ok: bool
    text: str = ""


class MappingRequest(BaseModel):
    """Everything the mapping dialog needs to render."""

    session_id: str
    burdens: list[str]
    headers: list[MasterHeader]
    employees: list[MatchedEmployee] = Field(default_factory=list)
    skip_label: str = "Skip"
    status: str = ""

    @property
    def header_names(self) -> list[str]:
        return [h.name for h in self.headers]

