"""Reconciliation endpoints.

The mapping dialog is a two-request round trip: ``POST /sessions`` extracts
and stores state, ``POST /sessions/{id}/mapping`` applies the user's choices.
Nothing is kept in process memory between the two.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, Request, Response
from pydantic import BaseModel, Field

from horizons.models.reconcile import MappingRequest, RunSummary
from horizons.workflow.controller import ReconciliationWorkflow

router = APIRouter(tags=["reconcile"])


class TabSelection(BaseModel):
    tabs: str = ""  # comma-separated, as typed into the prompt


class MappingSubmission(BaseModel):
    mapping: dict[str, Optional[str]] = Field(default_factory=dict)


def _workflow(request: Request) -> ReconciliationWorkflow:
    return request.app.state.workflow


@router.get("/tabs")
def list_tabs(request: Request) -> dict[str, list[str]]:
    return {"tabs": _workflow(request).available_tabs()}


@router.post("/sessions", status_code=201)
def begin_session(
    body: TabSelection,
    request: Request,
    x_horizons_user: Optional[str] = Header(default=None),
) -> MappingRequest:
    workflow = _workflow(request)
    tabs = workflow.select_tabs(body.tabs)
    return workflow.begin(tabs, user=x_horizons_user)


@router.get("/sessions/{session_id}")
def session_status(
    session_id: str,
    request: Request,
    x_horizons_user: Optional[str] = Header(default=None),
) -> dict[str, Optional[str]]:
    status = _workflow(request).session_status(session_id, user=x_horizons_user)
    return {"session_id": session_id, "status": status.value if status else None}


@router.post("/sessions/{session_id}/mapping")
def submit_mapping(
    session_id: str,
    body: MappingSubmission,
    request: Request,
    x_horizons_user: Optional[str] = Header(default=None),
) -> RunSummary:
    return _workflow(request).complete(session_id, body.mapping, user=x_horizons_user)


@router.delete("/sessions/{session_id}", status_code=204)
def cancel_session(
    session_id: str,
    request: Request,
    x_horizons_user: Optional[str] = Header(default=None),
) -> Response:
    _workflow(request).cancel(session_id, user=x_horizons_user)
    return Response(status_code=204)


@router.post("/fixed")
def run_fixed(body: TabSelection, request: Request) -> RunSummary:
    workflow = _workflow(request)
    return workflow.run_fixed(workflow.select_tabs(body.tabs))
