"""Namespaced, user-scoped session state for the two-step mapping run.

Each field of ``SessionState`` is stored as its own JSON string under
``{namespace}:{user}:{session_id}:{field}``. ``consume()`` hands the state to
the caller and deletes every key on the way out, whatever happens inside.
"""

from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import TypeAdapter

from horizons.core.exceptions import SessionStateMissingError
from horizons.core.protocols import ISessionStore
from horizons.models.payroll_record import EmployeeAggregate, SourceRecord
from horizons.models.pipeline import SessionState, WorkflowStatus
from horizons.models.reconcile import MatchedEmployee, ReportingPeriod

logger = logging.getLogger(__name__)

_EMPLOYEES = TypeAdapter(list[MatchedEmployee])
_RECORDS = TypeAdapter(list[SourceRecord])
_AGGREGATES = TypeAdapter(dict[str, EmployeeAggregate])

FIELDS = ("status", "period", "employees", "records", "aggregates")


def new_session_id() -> str:
    return uuid.uuid4().hex


class SessionScope:
    """Keys for one user's in-flight run."""

    def __init__(
        self,
        store: ISessionStore,
        *,
        session_id: str,
        user: str,
        namespace: str = "horizons",
        ttl: int = 6 * 60 * 60,
    ) -> None:
        self._store = store
        self.session_id = session_id
        self.user = user
        self.namespace = namespace
        self.ttl = ttl

    def key(self, field: str) -> str:
        return f"{self.namespace}:{self.user}:{self.session_id}:{field}"

    def save(self, state: SessionState) -> None:
        self._store.setex(self.key("period"), self.ttl, state.period.model_dump_json())
        self._store.setex(self.key("employees"), self.ttl, _EMPLOYEES.dump_json(state.employees).decode())
        self._store.setex(self.key("records"), self.ttl, _RECORDS.dump_json(state.records).decode())
        self._store.setex(self.key("aggregates"), self.ttl, _AGGREGATES.dump_json(state.aggregates).decode())
        self.set_status(state.status)

    def set_status(self, status: WorkflowStatus) -> None:
        self._store.setex(self.key("status"), self.ttl, json.dumps(status.value))

    def status(self) -> WorkflowStatus | None:
        raw = self._store.get(self.key("status"))
        return WorkflowStatus(json.loads(raw)) if raw is not None else None

    def load(self) -> SessionState:
        raw = {field: self._store.get(self.key(field)) for field in FIELDS}
        missing = [field for field, value in raw.items() if value is None]
        if missing:
            raise SessionStateMissingError(self.session_id, missing)
        return SessionState(
            status=WorkflowStatus(json.loads(raw["status"])),
            period=ReportingPeriod.model_validate_json(raw["period"]),
            employees=_EMPLOYEES.validate_json(raw["employees"]),
            records=_RECORDS.validate_json(raw["records"]),
            aggregates=_AGGREGATES.validate_json(raw["aggregates"]),
        )

    def clear(self) -> None:
        for field in FIELDS:
            self._store.delete(self.key(field))
        logger.debug("Cleared session %s for %r", self.session_id, self.user)

    @contextmanager
    def consume(self) -> Iterator[SessionState]:
        """Load the state and always clear it afterwards."""
        try:
            yield self.load()
        finally:
            self.clear()
