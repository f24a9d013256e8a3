"""Shared test doubles: memory backends and a scripted user interface."""

from __future__ import annotations

from horizons.models.reconcile import MappingRequest, PromptResponse
from horizons.persistence.memory_backend import MemorySessionStore, MemoryTabularStore


class ScriptedInterface:
    """IUserInterface that replays canned answers and records alerts."""

    def __init__(
        self,
        tabs: str | None = "",
        mapping: dict[str, str] | None = None,
    ) -> None:
        self._tabs = tabs
        self._mapping = mapping
        self.alerts: list[str] = []
        self.prompts: list[tuple[str, str]] = []
        self.mapping_requests: list[MappingRequest] = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def prompt(self, title: str, message: str) -> PromptResponse:
        self.prompts.append((title, message))
        if self._tabs is None:
            return PromptResponse(ok=False)
        return PromptResponse(ok=True, text=self._tabs)

    def request_mapping(self, request: MappingRequest) -> dict[str, str] | None:
        self.mapping_requests.append(request)
        return self._mapping


__all__ = ["MemorySessionStore", "MemoryTabularStore", "ScriptedInterface"]
