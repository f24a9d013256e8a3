"""Unit test fixtures: sample master/source grids and a wired workflow."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from horizons.core.config import AppSettings
from horizons.workflow.controller import ReconciliationWorkflow
from tests.fakes import MemorySessionStore, MemoryTabularStore
from tests.fakes.grids import MASTER_HEADER, SOURCE_HEADER, TODAY, master_row, source_row


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(environment="dev", user="tester")


@pytest.fixture
def master() -> MemoryTabularStore:
    return MemoryTabularStore(
        {
            "master": [["Country", "Employees"]],
            "Germany": [
                MASTER_HEADER,
                master_row("Alice", datetime(2026, 10, 1)),
                master_row("Alice", datetime(2026, 9, 1)),
                master_row("Bob", "10/05/2026"),
            ],
            "France": [
                MASTER_HEADER,
                master_row("Chloe", date(2026, 10, 31), country="FR"),
                master_row("Dan", date(2026, 10, 2), code="CTR-9", country="FR"),
            ],
        }
    )


@pytest.fixture
def source() -> MemoryTabularStore:
    return MemoryTabularStore(
        {
            "Sheet1": [
                SOURCE_HEADER,
                source_row("Alice", "Gross Income", 100),
                source_row("Alice", "Gross Income", 50),
                source_row("Alice", "Employer Pension", "1,200.50"),
                source_row("Bob", "Gross Income", 4000, fx=1.1),
                source_row("Bob", "Employer Pension", 0),
                source_row("Chloe", "Employer Health Insurance", 310),
                source_row("Chloe", "Meal Vouchers", 120),
                source_row("Zoe", "Gross Income", 999),
                source_row("", "Gross Income", 5),
            ]
        }
    )


@pytest.fixture
def sessions() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def workflow(settings, master, source, sessions) -> ReconciliationWorkflow:
    return ReconciliationWorkflow(
        settings=settings, master=master, source=source, sessions=sessions, today=TODAY,
    )
