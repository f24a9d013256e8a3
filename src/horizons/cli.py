"""Command-line entry point: console prompts instead of spreadsheet dialogs.

Usage:
    horizons-sync tabs
    horizons-sync run --tabs "Germany, France"
    horizons-sync run --fixed --master-workbook master.xlsx --source-workbook payroll.xlsx
"""

from __future__ import annotations

import argparse
from collections.abc import Callable

from horizons.core.config import AppSettings
from horizons.core.exceptions import HorizonsError
from horizons.core.logging_config import configure_logging
from horizons.models.reconcile import MappingRequest, PromptResponse
from horizons.persistence import create_persistence, create_session_store
from horizons.persistence.workbook_backend import WorkbookStore
from horizons.workflow.controller import ReconciliationWorkflow
from horizons.workflow.interactive import MAPPING_TITLE, run_interactive


class ConsoleInterface:
    """IUserInterface over stdin/stdout."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        preset_tabs: str | None = None,
    ) -> None:
        self._input = input_fn
        self._output = output_fn
        self._preset_tabs = preset_tabs

    def alert(self, message: str) -> None:
        self._output(message)

    def prompt(self, title: str, message: str) -> PromptResponse:
        if self._preset_tabs is not None:
            return PromptResponse(ok=True, text=self._preset_tabs)
        self._output(f"== {title} ==\n{message}")
        try:
            text = self._input("> ")
        except EOFError:
            return PromptResponse(ok=False)
        return PromptResponse(ok=True, text=text)

    def request_mapping(self, request: MappingRequest) -> dict[str, str] | None:
        """Ask for one column per burden; blank means Skip, 'q' cancels."""
        self._output(f"== {MAPPING_TITLE} ==")
        for number, header in enumerate(request.headers, start=1):
            self._output(f"  {number:>3}. {header.name} ({header.letter})")
        selection: dict[str, str] = {}
        for burden in request.burdens:
            while True:
                try:
                    answer = self._input(f"{burden} [number, blank={request.skip_label}, q=cancel]: ").strip()
                except EOFError:
                    return None
                if answer.lower() == "q":
                    return None
                if not answer:
                    selection[burden] = request.skip_label
                    break
                if answer.isdigit() and 1 <= int(answer) <= len(request.headers):
                    selection[burden] = request.headers[int(answer) - 1].name
                    break
                self._output(f"  Enter a number between 1 and {len(request.headers)}.")
        return selection


def build_workflow(args: argparse.Namespace, settings: AppSettings) -> tuple[ReconciliationWorkflow, WorkbookStore | None]:
    master_book: WorkbookStore | None = None
    if args.master_workbook or args.source_workbook:
        if not (args.master_workbook and args.source_workbook):
            raise SystemExit("--master-workbook and --source-workbook must be given together")
        master_book = WorkbookStore(args.master_workbook)
        master, source = master_book, WorkbookStore(args.source_workbook)
        sessions = create_session_store(settings)
    else:
        master, source, sessions = create_persistence(settings)
    workflow = ReconciliationWorkflow(settings=settings, master=master, source=source, sessions=sessions)
    return workflow, master_book


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Copy Horizons payroll burdens into the master sheet")
    parser.add_argument("--master-workbook", default=None, help="Local master .xlsx instead of Google Sheets")
    parser.add_argument("--source-workbook", default=None, help="Local source .xlsx instead of Google Sheets")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("tabs", help="List country tabs in the master spreadsheet")
    run = sub.add_parser("run", help="Copy this month's payroll data")
    run.add_argument("--tabs", default=None, help="Comma-separated tabs (skips the prompt)")
    run.add_argument("--fixed", action="store_true", help="Use the configured burden -> column mapping")
    args = parser.parse_args(argv)

    settings = AppSettings()
    configure_logging(settings.log_level)
    workflow, master_book = build_workflow(args, settings)

    if args.command == "tabs":
        try:
            for name in workflow.available_tabs():
                print(name)
        except HorizonsError as exc:
            print(exc)
            return 1
        return 0

    ui = ConsoleInterface(preset_tabs=args.tabs)
    summary = run_interactive(workflow, ui, fixed=args.fixed)
    if summary is None:
        return 1
    if master_book is not None:
        master_book.save()
    return 0 if summary.failed == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())
