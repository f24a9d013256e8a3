"""Workflow status and the state carried across the two-step interaction."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from horizons.models.payroll_record import EmployeeAggregate, SourceRecord
from horizons.models.reconcile import MatchedEmployee, ReportingPeriod


class WorkflowStatus(StrEnum):
    IDLE = "IDLE"
    TABS_SELECTED = "TABS_SELECTED"
    EMPLOYEES_COLLECTED = "EMPLOYEES_COLLECTED"
    SOURCE_DATA_FETCHED = "SOURCE_DATA_FETCHED"
    AWAITING_MAPPING = "AWAITING_MAPPING"
    MAPPING_RECEIVED = "MAPPING_RECEIVED"
    APPLIED = "APPLIED"
    CANCELLED = "CANCELLED"


class SessionState(BaseModel):
    """What must survive between extraction and mapping confirmation."""

    status: WorkflowStatus = WorkflowStatus.AWAITING_MAPPING
    period: ReportingPeriod
    employees: list[MatchedEmployee] = Field(default_factory=list)
    records: list[SourceRecord] = Field(default_factory=list)
    aggregates: dict[str, EmployeeAggregate] = Field(default_factory=dict)
