"""Protocol interfaces for all Horizons abstractions.

All collaborators are injected through these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from horizons.core.types import Cell, Row
from horizons.models.reconcile import MappingRequest, PromptResponse


# ---------------------------------------------------------------------------
# Tabular data source / sink
# ---------------------------------------------------------------------------

@runtime_checkable
class ITabularStore(Protocol):
    """Spreadsheet-like store with 1-based row/column addressing.

    Writes are synchronous and immediately visible to subsequent reads.
    """

    def sheet_names(self) -> list[str]: ...

    def get_all_values(self, sheet: str) -> list[Row]: ...

    def get_cell(self, sheet: str, row: int, column: int) -> Cell: ...

    def set_cell(self, sheet: str, row: int, column: int, value: Any) -> None: ...

    def get_row(self, sheet: str, row: int, start_column: int = 1) -> Row: ...


# ---------------------------------------------------------------------------
# Session key-value store
# ---------------------------------------------------------------------------

@runtime_checkable
class ISessionStore(Protocol):
    """Redis-compatible key-value store bridging the two interactions."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# User interaction surface
# ---------------------------------------------------------------------------

@runtime_checkable
class IUserInterface(Protocol):
    """Modal alert / prompt / mapping dialog."""

    def alert(self, message: str) -> None: ...

    def prompt(self, title: str, message: str) -> PromptResponse: ...

    def request_mapping(self, request: MappingRequest) -> dict[str, str] | None: ...
