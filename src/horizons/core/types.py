"""Type aliases used across the Horizons package."""

from __future__ import annotations

from typing import Any

Cell = Any
Row = list[Any]
