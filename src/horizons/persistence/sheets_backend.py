"""Google Sheets backend implementing ITabularStore via gspread."""

from __future__ import annotations

from typing import Any

import gspread
from google.oauth2.service_account import Credentials
from gspread.exceptions import WorksheetNotFound
from gspread.utils import DateTimeOption, ValueRenderOption

from horizons.core.exceptions import SheetNotFoundError, TabularStoreError


class GoogleSheetsStore:
    """Production ITabularStore backed by one Google spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_file: str = "credentials.json",
        scopes: list[str] | None = None,
        client: gspread.Client | None = None,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._credentials_file = credentials_file
        self._scopes = scopes or ["https://www.googleapis.com/auth/spreadsheets"]
        self._client = client
        self._book: gspread.Spreadsheet | None = None
        self._worksheets: dict[str, gspread.Worksheet] = {}

    def _spreadsheet(self) -> gspread.Spreadsheet:
        if self._book is None:
            try:
                if self._client is None:
                    creds = Credentials.from_service_account_file(self._credentials_file, scopes=self._scopes)
                    self._client = gspread.authorize(creds)
                self._book = self._client.open_by_key(self._spreadsheet_id)
            except Exception as exc:
                raise TabularStoreError(
                    f"Cannot open spreadsheet {self._spreadsheet_id!r}: {exc}"
                ) from exc
        return self._book

    def _worksheet(self, sheet: str) -> gspread.Worksheet:
        if sheet not in self._worksheets:
            book = self._spreadsheet()
            try:
                self._worksheets[sheet] = book.worksheet(sheet)
            except WorksheetNotFound:
                raise SheetNotFoundError(sheet) from None
            except Exception as exc:
                raise TabularStoreError(f"Cannot open sheet {sheet!r}: {exc}") from exc
        return self._worksheets[sheet]

    def sheet_names(self) -> list[str]:
        book = self._spreadsheet()
        try:
            return [ws.title for ws in book.worksheets()]
        except Exception as exc:
            raise TabularStoreError(f"Listing sheets failed: {exc}") from exc

    def get_all_values(self, sheet: str) -> list[list[Any]]:
        """Native cell values: numbers as numbers, dates as serial day numbers."""
        ws = self._worksheet(sheet)
        try:
            return ws.get_all_values(
                value_render_option=ValueRenderOption.unformatted,
                date_time_render_option=DateTimeOption.serial_number,
            )
        except Exception as exc:
            raise TabularStoreError(f"Reading {sheet!r} failed: {exc}") from exc

    def get_cell(self, sheet: str, row: int, column: int) -> Any:
        ws = self._worksheet(sheet)
        try:
            return ws.cell(row, column, value_render_option=ValueRenderOption.unformatted).value
        except Exception as exc:
            raise TabularStoreError(f"Reading {sheet!r} R{row}C{column} failed: {exc}") from exc

    def set_cell(self, sheet: str, row: int, column: int, value: Any) -> None:
        ws = self._worksheet(sheet)
        try:
            ws.update_cell(row, column, value)
        except Exception as exc:
            raise TabularStoreError(f"Writing {sheet!r} R{row}C{column} failed: {exc}") from exc

    def get_row(self, sheet: str, row: int, start_column: int = 1) -> list[Any]:
        ws = self._worksheet(sheet)
        try:
            values = ws.row_values(row)
        except Exception as exc:
            raise TabularStoreError(f"Reading {sheet!r} row {row} failed: {exc}") from exc
        return values[start_column - 1:]
