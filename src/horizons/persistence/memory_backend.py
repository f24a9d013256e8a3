"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

import copy
from typing import Any

from horizons.core.exceptions import SheetNotFoundError, TabularStoreError

Cell = tuple[str, int, int]


class MemorySessionStore:
    """Dict-backed ISessionStore for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self.ttls.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._store)


class MemoryTabularStore:
    """Dict-of-grids ITabularStore for unit tests.

    ``failing_cells`` raise TabularStoreError on write; writes to
    ``ignored_cells`` are silently dropped so read-back verification fails.
    """

    def __init__(self, sheets: dict[str, list[list[Any]]] | None = None) -> None:
        self._sheets: dict[str, list[list[Any]]] = {
            name: [list(row) for row in rows] for name, rows in (sheets or {}).items()
        }
        self.failing_cells: set[Cell] = set()
        self.ignored_cells: set[Cell] = set()
        self.writes: list[tuple[str, int, int, Any]] = []

    def _grid(self, sheet: str) -> list[list[Any]]:
        try:
            return self._sheets[sheet]
        except KeyError:
            raise SheetNotFoundError(sheet) from None

    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    def get_all_values(self, sheet: str) -> list[list[Any]]:
        return copy.deepcopy(self._grid(sheet))

    def get_cell(self, sheet: str, row: int, column: int) -> Any:
        grid = self._grid(sheet)
        if row < 1 or column < 1:
            raise TabularStoreError(f"Invalid cell address row={row} column={column}")
        if row > len(grid) or column > len(grid[row - 1]):
            return ""
        return grid[row - 1][column - 1]

    def set_cell(self, sheet: str, row: int, column: int, value: Any) -> None:
        grid = self._grid(sheet)
        if row < 1 or column < 1:
            raise TabularStoreError(f"Invalid cell address row={row} column={column}")
        if (sheet, row, column) in self.failing_cells:
            raise TabularStoreError(f"Simulated write failure at {sheet}!R{row}C{column}")
        self.writes.append((sheet, row, column, value))
        if (sheet, row, column) in self.ignored_cells:
            return
        while len(grid) < row:
            grid.append([])
        target = grid[row - 1]
        while len(target) < column:
            target.append("")
        target[column - 1] = value

    def get_row(self, sheet: str, row: int, start_column: int = 1) -> list[Any]:
        grid = self._grid(sheet)
        width = max((len(r) for r in grid), default=0)
        if row < 1 or row > len(grid):
            return []
        padded = grid[row - 1] + [""] * (width - len(grid[row - 1]))
        return padded[start_column - 1:]
