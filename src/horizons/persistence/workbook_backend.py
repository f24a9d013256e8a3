"""Local .xlsx backend implementing ITabularStore via openpyxl."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook

from horizons.core.exceptions import SheetNotFoundError, TabularStoreError


class WorkbookStore:
    """ITabularStore over an openpyxl workbook; call ``save()`` to persist."""

    def __init__(self, path: str | Path, workbook: Workbook | None = None) -> None:
        self._path = Path(path)
        if workbook is not None:
            self._wb = workbook
        else:
            try:
                self._wb = load_workbook(self._path)
            except Exception as exc:
                raise TabularStoreError(f"Cannot open workbook {str(self._path)!r}: {exc}") from exc

    def _ws(self, sheet: str):
        if sheet not in self._wb.sheetnames:
            raise SheetNotFoundError(sheet)
        return self._wb[sheet]

    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def get_all_values(self, sheet: str) -> list[list[Any]]:
        ws = self._ws(sheet)
        return [["" if v is None else v for v in row] for row in ws.iter_rows(values_only=True)]

    def get_cell(self, sheet: str, row: int, column: int) -> Any:
        ws = self._ws(sheet)
        try:
            return ws.cell(row=row, column=column).value
        except ValueError as exc:
            raise TabularStoreError(f"Reading {sheet!r} R{row}C{column} failed: {exc}") from exc

    def set_cell(self, sheet: str, row: int, column: int, value: Any) -> None:
        ws = self._ws(sheet)
        try:
            ws.cell(row=row, column=column, value=value)
        except ValueError as exc:
            raise TabularStoreError(f"Writing {sheet!r} R{row}C{column} failed: {exc}") from exc

    def get_row(self, sheet: str, row: int, start_column: int = 1) -> list[Any]:
        ws = self._ws(sheet)
        if ws.max_column < start_column:
            return []
        cells = next(
            ws.iter_rows(min_row=row, max_row=row, min_col=start_column,
                         max_col=ws.max_column, values_only=True),
            (),
        )
        return ["" if v is None else v for v in cells]

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self._path
        try:
            self._wb.save(target)
        except OSError as exc:
            raise TabularStoreError(f"Saving workbook {str(target)!r} failed: {exc}") from exc
        return target
