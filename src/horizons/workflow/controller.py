"""ReconciliationWorkflow: Extractor + Matcher + Writer for both variants.

Interactive variant (two calls, bridged by the session store)::

    IDLE -> TABS_SELECTED -> EMPLOYEES_COLLECTED -> SOURCE_DATA_FETCHED
         -> AWAITING_MAPPING            (begin() returns a MappingRequest)
         -> MAPPING_RECEIVED -> APPLIED (complete())

Any configuration problem or an empty tab selection ends in CANCELLED before a
single cell is written. The fixed variant (run_fixed) walks the same states in
one call with the category -> column mapping taken from configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date

from horizons.core.config import AppSettings
from horizons.core.exceptions import ConfigurationError, HorizonsError, WorkflowCancelled
from horizons.core.protocols import ISessionStore, ITabularStore
from horizons.models.payroll_record import EmployeeAggregate, SourceRecord
from horizons.models.pipeline import SessionState, WorkflowStatus
from horizons.models.reconcile import (
    ColumnMapping,
    MappingRequest,
    MasterHeader,
    MatchedEmployee,
    ReportingPeriod,
    RunSummary,
)
from horizons.persistence.session import SessionScope, new_session_id
from horizons.reconcile.extractor import (
    aggregate,
    aggregate_by_category,
    distinct_burdens,
    filter_relevant,
    read_source_records,
)
from horizons.reconcile.mapper import build_column_mapping, fixed_column_mapping, read_master_headers
from horizons.reconcile.matcher import collect_employees, find_rows
from horizons.reconcile.planner import plan_updates
from horizons.reconcile.writer import CellWriter

logger = logging.getLogger(__name__)


class ReconciliationWorkflow:
    """Workflow controller.

    Collaborators (master/source spreadsheets, session store) are injected at
    construction time. ``today`` pins the reporting period, mostly for tests.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        master: ITabularStore,
        source: ITabularStore,
        sessions: ISessionStore,
        today: date | None = None,
    ) -> None:
        self._settings = settings
        self._master = master
        self._source = source
        self._sessions = sessions
        self._today = today

    @property
    def period(self) -> ReportingPeriod:
        return ReportingPeriod.current(self._today)

    def _transition(self, status: WorkflowStatus, detail: str = "") -> None:
        logger.info("Workflow -> %s%s", status.value, f" ({detail})" if detail else "")

    def _scope(self, session_id: str, user: str | None) -> SessionScope:
        return SessionScope(
            self._sessions,
            session_id=session_id,
            user=user or self._settings.user,
            namespace=self._settings.session.namespace,
            ttl=self._settings.session.ttl_seconds,
        )

    # ---- step 1: tab selection ----

    def available_tabs(self) -> list[str]:
        """Every master tab except the master tab itself."""
        master_name = self._settings.master.master_tab_name.lower()
        tabs = [name for name in self._master.sheet_names() if name.lower() != master_name]
        if not tabs:
            raise ConfigurationError("No country-specific tabs found.")
        return tabs

    def select_tabs(self, raw: str | None) -> list[str]:
        """Parse comma-separated tab names and validate them."""
        if raw is None or not raw.strip():
            self._transition(WorkflowStatus.CANCELLED, "no tabs entered")
            raise WorkflowCancelled("No tabs entered. Operation cancelled.")
        selected = list(dict.fromkeys(name.strip() for name in raw.split(",") if name.strip()))
        available = self.available_tabs()
        invalid = [name for name in selected if name not in available]
        if invalid:
            self._transition(WorkflowStatus.CANCELLED, "invalid tabs")
            raise ConfigurationError(
                f"The following tabs are invalid or do not exist: {', '.join(invalid)}. "
                "Please check and try again."
            )
        self._transition(WorkflowStatus.TABS_SELECTED, ", ".join(selected))
        return selected

    # ---- step 2: employees + source data ----

    def collect_employees(self, tabs: list[str], period: ReportingPeriod | None = None) -> list[MatchedEmployee]:
        period = period or self.period
        employees: list[MatchedEmployee] = []
        for tab in tabs:
            try:
                rows = self._master.get_all_values(tab)
            except HorizonsError as exc:
                raise ConfigurationError(f"Cannot read master tab {tab!r}: {exc}") from exc
            employees.extend(collect_employees(rows, tab, period, self._settings.master))
        if not employees:
            self._transition(WorkflowStatus.CANCELLED, "no employees")
            raise ConfigurationError("No employees found matching the criteria.")
        self._transition(WorkflowStatus.EMPLOYEES_COLLECTED, f"{len(employees)} row(s)")
        return employees

    def fetch_source(self, employees: list[MatchedEmployee]) -> list[SourceRecord]:
        """Relevant source rows (target employees, non-empty burden, non-zero amount)."""
        cfg = self._settings.source
        try:
            rows = self._source.get_all_values(cfg.sheet_name)
        except HorizonsError as exc:
            logger.error("Error accessing source sheet %r: %s", cfg.sheet_name, exc)
            self._transition(WorkflowStatus.CANCELLED, "source unavailable")
            raise ConfigurationError("Failed to retrieve data from the source sheet.") from exc
        names = {e.name for e in employees}
        records = filter_relevant(read_source_records(rows, cfg), names)
        self._transition(WorkflowStatus.SOURCE_DATA_FETCHED, f"{len(records)} relevant row(s)")
        return records

    def master_headers(self, tab: str) -> list[MasterHeader]:
        cfg = self._settings.master
        return read_master_headers(self._master, cfg.header_tab or tab, cfg.header_row, cfg.mapping_start_column)

    # ---- interactive variant ----

    def begin(self, tabs: list[str], user: str | None = None) -> MappingRequest:
        """Extract and persist everything the mapping step needs."""
        period = self.period
        employees = self.collect_employees(tabs, period)
        records = self.fetch_source(employees)
        names = {e.name for e in employees}
        allowed = self._settings.reconcile.burden_allow_list
        aggregates = aggregate(records, names, allowed)

        headers: dict[str, MasterHeader] = {}
        for tab in dict.fromkeys(e.sheet_name for e in employees):
            for header in self.master_headers(tab):
                headers.setdefault(header.name, header)

        session_id = new_session_id()
        self._scope(session_id, user).save(
            SessionState(
                status=WorkflowStatus.AWAITING_MAPPING,
                period=period,
                employees=employees,
                records=records,
                aggregates=aggregates,
            )
        )
        self._transition(WorkflowStatus.AWAITING_MAPPING, f"session {session_id}")
        return MappingRequest(
            session_id=session_id,
            burdens=[b for b in distinct_burdens(records) if allowed is None or b in allowed],
            headers=list(headers.values()),
            employees=employees,
            skip_label=self._settings.master.skip_label,
            status=WorkflowStatus.AWAITING_MAPPING.value,
        )

    def session_status(self, session_id: str, user: str | None = None) -> WorkflowStatus | None:
        return self._scope(session_id, user).status()

    def complete(
        self, session_id: str, selection: Mapping[str, str | None], user: str | None = None
    ) -> RunSummary:
        """Apply the user's burden -> column choices. The session is always cleared."""
        scope = self._scope(session_id, user)
        with scope.consume() as state:
            scope.set_status(WorkflowStatus.MAPPING_RECEIVED)
            self._transition(WorkflowStatus.MAPPING_RECEIVED, f"session {session_id}")
            skip = self._settings.master.skip_label
            mappings: dict[str, ColumnMapping] = {}

            def mapping_for(sheet: str) -> ColumnMapping:
                if sheet not in mappings:
                    mappings[sheet] = build_column_mapping(selection, self.master_headers(sheet), skip)
                return mappings[sheet]

            summary = self._apply(state.employees, state.aggregates, mapping_for, state.period)
        self._transition(WorkflowStatus.APPLIED, summary.message)
        return summary

    def cancel(self, session_id: str, user: str | None = None) -> None:
        self._scope(session_id, user).clear()
        self._transition(WorkflowStatus.CANCELLED, f"session {session_id}")

    # ---- fixed variant ----

    def run_fixed(self, tabs: list[str]) -> RunSummary:
        """Extract, match and write with the configured category -> column mapping."""
        period = self.period
        employees = self.collect_employees(tabs, period)
        records = self.fetch_source(employees)
        aggregates = aggregate_by_category(records, {e.name for e in employees})
        mapping = fixed_column_mapping(self._settings.reconcile.fixed_columns)
        self._transition(WorkflowStatus.MAPPING_RECEIVED, "fixed mapping")

        summary = self._apply(employees, aggregates, lambda sheet: mapping, period)
        for agg in aggregates.values():
            for label in agg.unrecognized:
                summary.warnings.append(f"Unrecognized burden {label!r} for {agg.employee_name} was not copied.")
        self._transition(WorkflowStatus.APPLIED, summary.message)
        return summary

    # ---- shared: match + plan + write ----

    def _apply(
        self,
        employees: list[MatchedEmployee],
        aggregates: Mapping[str, EmployeeAggregate],
        mapping_for: Callable[[str], ColumnMapping],
        period: ReportingPeriod,
    ) -> RunSummary:
        cfg = self._settings
        sheets_by_name: dict[str, list[str]] = {}
        for e in employees:
            sheets = sheets_by_name.setdefault(e.name, [])
            if e.sheet_name not in sheets:
                sheets.append(e.sheet_name)

        warnings: list[str] = []
        rows_by_sheet: dict[str, list[list]] = {}
        unreadable: set[str] = set()
        targets: list[MatchedEmployee] = []
        skipped: list[str] = []

        for name in aggregates:
            sheets = sheets_by_name.get(name)
            if not sheets:
                logger.info("Employee %r not found in selected master sheets", name)
                skipped.append(name)
                continue
            found = False
            for sheet in sheets:
                if sheet in unreadable:
                    continue
                if sheet not in rows_by_sheet:
                    try:
                        rows_by_sheet[sheet] = self._master.get_all_values(sheet)
                    except HorizonsError as exc:
                        logger.error("Sheet %r could not be read: %s", sheet, exc)
                        warnings.append(f"Sheet {sheet!r} could not be read: {exc}")
                        unreadable.add(sheet)
                        continue
                rows = find_rows(
                    rows_by_sheet[sheet], name, period, cfg.master,
                    allow_multiple=cfg.reconcile.allow_multiple_matches,
                )
                if not rows:
                    logger.info("No matching row found for employee %r in sheet %r", name, sheet)
                    continue
                found = True
                for row in rows:
                    logger.info("Copying data for employee %r to sheet %r, row %d", name, sheet, row)
                    targets.append(MatchedEmployee(name=name, sheet_name=sheet, row_index=row))
            if not found:
                skipped.append(name)

        instructions = []
        for sheet in dict.fromkeys(t.sheet_name for t in targets):
            try:
                mapping = mapping_for(sheet)
            except HorizonsError as exc:
                logger.error("Cannot resolve column mapping for sheet %r: %s", sheet, exc)
                warnings.append(f"Sheet {sheet!r} skipped: {exc}")
                continue
            for burden, label in mapping.unresolved.items():
                warnings.append(f'Mapped column "{label}" for burden "{burden}" not found in sheet {sheet!r}.')
            instructions.extend(
                plan_updates(
                    aggregates,
                    [t for t in targets if t.sheet_name == sheet],
                    mapping,
                    cfg.master.fx_rate_column,
                )
            )

        writer = CellWriter(
            self._master,
            verify=cfg.reconcile.verify_writes,
            log_prior=cfg.reconcile.log_prior_values,
        )
        summary = writer.apply(instructions)
        summary.skipped_employees = skipped
        summary.warnings = warnings
        return summary


def create_workflow(settings: AppSettings | None = None) -> ReconciliationWorkflow:
    """Workflow wired to the configured Google Sheets and session backends."""
    from horizons.persistence import create_persistence

    settings = settings or AppSettings()
    master, source, sessions = create_persistence(settings)
    return ReconciliationWorkflow(settings=settings, master=master, source=source, sessions=sessions)
