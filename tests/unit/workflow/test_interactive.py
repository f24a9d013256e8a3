"""Tests for run_interactive with a scripted user interface."""

from __future__ import annotations

import pytest

from horizons.workflow.interactive import TAB_PROMPT_TITLE, run_interactive
from tests.fakes import ScriptedInterface

SELECTION = {
    "Gross Income": "Gross Pay",
    "Employer Pension": "Pension ER",
    "Employer Health Insurance": "Health ER",
    "Meal Vouchers": "Skip",
}


def test_prompt_lists_available_tabs(workflow):
    ui = ScriptedInterface(tabs="Germany", mapping=SELECTION)
    run_interactive(workflow, ui)
    title, message = ui.prompts[0]
    assert title == TAB_PROMPT_TITLE
    assert "Available tabs: Germany, France" in message


def test_dismissed_prompt_cancels(workflow, master):
    ui = ScriptedInterface(tabs=None)
    assert run_interactive(workflow, ui) is None
    assert ui.alerts == ["Operation cancelled."]
    assert ui.mapping_requests == []
    assert master.writes == []


def test_empty_tab_list_cancels(workflow, master):
    ui = ScriptedInterface(tabs="  ")
    assert run_interactive(workflow, ui) is None
    assert ui.alerts == ["No tabs entered. Operation cancelled."]
    assert master.writes == []


def test_invalid_tab_is_reported(workflow):
    ui = ScriptedInterface(tabs="Spain")
    assert run_interactive(workflow, ui) is None
    assert ui.alerts[0].startswith("The following tabs are invalid or do not exist: Spain")


def test_dismissed_mapping_clears_session(workflow, master, sessions):
    ui = ScriptedInterface(tabs="Germany, France", mapping=None)
    assert run_interactive(workflow, ui) is None
    assert len(ui.mapping_requests) == 1
    assert ui.alerts == ["Operation cancelled."]
    assert sessions.keys() == []
    assert master.writes == []


class InterruptedDialog(ScriptedInterface):
    def request_mapping(self, request):
        super().request_mapping(request)
        raise KeyboardInterrupt


def test_interrupted_mapping_dialog_clears_session(workflow, master, sessions):
    ui = InterruptedDialog(tabs="Germany")
    with pytest.raises(KeyboardInterrupt):
        run_interactive(workflow, ui)
    assert len(ui.mapping_requests) == 1
    assert sessions.keys() == []
    assert master.writes == []


def test_mapping_is_applied_and_reported(workflow, master, sessions):
    ui = ScriptedInterface(tabs="Germany, France", mapping=SELECTION)
    summary = run_interactive(workflow, ui)
    assert summary is not None
    assert (summary.succeeded, summary.failed) == (7, 0)
    assert ui.alerts == ["Payroll data updated: 7 cell(s) written, 0 failed."]
    assert master.get_cell("Germany", 2, 23) == 150
    assert sessions.keys() == []


def test_mapping_request_contents(workflow):
    ui = ScriptedInterface(tabs="France", mapping={})
    run_interactive(workflow, ui)
    request = ui.mapping_requests[0]
    assert request.burdens == ["Employer Health Insurance", "Meal Vouchers"]
    assert request.skip_label == "Skip"
    assert [h.letter for h in request.headers] == ["W", "X", "Y", "AA"]


def test_fixed_variant_skips_mapping_dialog(workflow, master):
    ui = ScriptedInterface(tabs="Germany, France")
    summary = run_interactive(workflow, ui, fixed=True)
    assert summary is not None
    assert ui.mapping_requests == []
    assert master.get_cell("Germany", 2, 14) == 150
    assert ui.alerts == [
        "Payroll data updated: 7 cell(s) written, 0 failed.\n"
        "Unrecognized burden 'Meal Vouchers' for Chloe was not copied."
    ]
