"""Mapper: burden label -> master column resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from horizons.core.protocols import ITabularStore
from horizons.models.reconcile import ColumnMapping, MasterHeader
from horizons.reconcile.columns import column_number_to_letter

logger = logging.getLogger(__name__)


def read_master_headers(
    store: ITabularStore, sheet: str, header_row: int = 1, start_column: int = 23
) -> list[MasterHeader]:
    """Non-empty header labels from ``start_column`` to the last column."""
    labels = store.get_row(sheet, header_row, start_column)
    headers = [
        MasterHeader(name=str(label).strip(), column_index=start_column + offset)
        for offset, label in enumerate(labels)
        if label is not None and str(label).strip()
    ]
    logger.debug("Read %d master header(s) from %r", len(headers), sheet)
    return headers


def build_column_mapping(
    selection: Mapping[str, str | None],
    headers: list[MasterHeader],
    skip_label: str = "Skip",
) -> ColumnMapping:
    """Resolve the user's burden -> header label choices to column indices.

    ``skip_label`` (or an empty choice) maps nothing. A label missing from the
    header row is kept in ``unresolved`` and the burden is left unmapped.
    """
    by_name = {h.name: h.column_index for h in headers}
    mapping = ColumnMapping()
    for burden, label in selection.items():
        if label is None or not str(label).strip() or label == skip_label:
            mapping.skipped.append(burden)
            continue
        column = by_name.get(str(label).strip())
        if column is None:
            logger.warning("Mapped column %r for burden %r not found in master sheet", label, burden)
            mapping.unresolved[burden] = str(label)
            continue
        mapping.columns[burden] = column

    for burden, column in mapping.columns.items():
        logger.info("%s -> Column %d (%s)", burden, column, column_number_to_letter(column))
    return mapping


def fixed_column_mapping(columns_by_category: Mapping[str, int]) -> ColumnMapping:
    """Mapping for the fixed variant, straight from configuration."""
    return ColumnMapping(columns={str(k): int(v) for k, v in columns_by_category.items()})
