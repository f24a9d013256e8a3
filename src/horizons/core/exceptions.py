"""Horizons exception hierarchy."""

from __future__ import annotations


class HorizonsError(Exception):
    """Base exception for all Horizons errors."""


class ConfigurationError(HorizonsError):
    """Missing sheet, empty required input, or nothing to process.

    Raised before any cell is written.
    """


class WorkflowCancelled(HorizonsError):
    """The user declined a prompt or entered nothing."""


class SheetNotFoundError(HorizonsError):
    """Requested sheet/tab does not exist in the spreadsheet."""

    def __init__(self, sheet_name: str) -> None:
        self.sheet_name = sheet_name
        super().__init__(f"Sheet {sheet_name!r} not found")


class TabularStoreError(HorizonsError):
    """Spreadsheet backend read or write failed."""


class SessionStoreError(HorizonsError):
    """Session key-value store operation failed."""


class SessionStateMissingError(HorizonsError):
    """Stored state for a two-step run is absent or expired."""

    def __init__(self, session_id: str, missing: list[str]) -> None:
        self.session_id = session_id
        self.missing = missing
        super().__init__(
            f"Session {session_id} is missing {', '.join(missing)}. "
            "Please run the payroll update process again."
        )


class CellWriteError(HorizonsError):
    """A single cell could not be written."""

    def __init__(self, sheet_name: str, cell: str, message: str) -> None:
        self.sheet_name = sheet_name
        self.cell = cell
        super().__init__(f"{sheet_name}!{cell}: {message}")


class VerificationMismatch(CellWriteError):
    """Read-back value differs from the value written."""

    def __init__(self, sheet_name: str, cell: str, expected: object, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(sheet_name, cell, f"expected {expected!r}, read back {actual!r}")
