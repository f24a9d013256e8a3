"""Drive a ReconciliationWorkflow through a modal user interface."""

from __future__ import annotations

import logging

from horizons.core.exceptions import HorizonsError, WorkflowCancelled
from horizons.core.protocols import IUserInterface
from horizons.models.reconcile import RunSummary
from horizons.workflow.controller import ReconciliationWorkflow

logger = logging.getLogger(__name__)

TAB_PROMPT_TITLE = "Select Tabs to Process"
MAPPING_TITLE = "Map Burdens to Master Sheet Columns"


def prompt_for_tabs(workflow: ReconciliationWorkflow, ui: IUserInterface) -> list[str]:
    tabs = workflow.available_tabs()
    response = ui.prompt(
        TAB_PROMPT_TITLE,
        "Enter the names of the sheets you want to process, separated by commas.\n"
        f"Available tabs: {', '.join(tabs)}",
    )
    if not response.ok:
        raise WorkflowCancelled("Operation cancelled.")
    return workflow.select_tabs(response.text)


def _report(ui: IUserInterface, summary: RunSummary) -> None:
    lines = [summary.message, *summary.warnings]
    ui.alert("\n".join(lines))


def run_interactive(
    workflow: ReconciliationWorkflow,
    ui: IUserInterface,
    *,
    fixed: bool = False,
    user: str | None = None,
) -> RunSummary | None:
    """Run one reconciliation end to end; returns None when it was cancelled.

    Every error raised before the write step is shown to the user and ends the
    run with nothing written.
    """
    try:
        tabs = prompt_for_tabs(workflow, ui)
        if fixed:
            summary = workflow.run_fixed(tabs)
            _report(ui, summary)
            return summary
        request = workflow.begin(tabs, user=user)
    except HorizonsError as exc:
        logger.info("Run ended before writing: %s", exc)
        ui.alert(str(exc))
        return None

    # complete() clears the session itself; every other exit cancels it
    applying = False
    try:
        selection = ui.request_mapping(request)
        if selection is None:
            ui.alert("Operation cancelled.")
            return None
        applying = True
        summary = workflow.complete(request.session_id, selection, user=user)
    except HorizonsError as exc:
        logger.error("Applying mapping failed: %s", exc)
        ui.alert(str(exc))
        return None
    finally:
        if not applying:
            workflow.cancel(request.session_id, user=user)
    _report(ui, summary)
    return summary
