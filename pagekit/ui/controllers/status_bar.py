# pagekit/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Hashable

from rich.text import Text
from textual.widgets import Static

from pagekit.models.pagination import ListState, UNKNOWN_TOTAL


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    STATE_STYLES = {
        "loading": ("LOADING [⟳]", "blue"),
        "error": ("ERROR [✗]", "red"),
        "complete": ("DONE [✓]", "green"),
        "idle": ("IDLE", "white"),
    }

    def __init__(self, status_bar: Static) -> None:
        self._bar = status_bar

    def update(self, key: Hashable, state: ListState) -> None:
        """Refresh the whole status line from a snapshot."""
        self._bar.update(self.render(key, state))

    @classmethod
    def render(cls, key: Hashable, state: ListState) -> Text:
        total = "?" if state.total_count == UNKNOWN_TOTAL else str(state.total_count)
        parts: list[str] = [
            f"List: {key}",
            f"Items: {state.loaded_count}/{total}",
            f"Page: {state.current_page + 1}",
        ]
        if state.search_term:
            parts.append(f"Search: '{state.search_term}'")
        if state.filters:
            parts.append("Filters: " + ", ".join(f"{k}={v}" for k, v in state.filters.items()))

        label, style = cls.STATE_STYLES[cls._status(state)]
        text = Text(" | ".join(parts))
        text.append(" | ")
        text.append(label, style=style)
        return text

    @staticmethod
    def _status(state: ListState) -> str:
        if state.is_loading:
            return "loading"
        if state.error is not None:
            return "error"
        if state.total_count != UNKNOWN_TOTAL and not state.has_more:
            return "complete"
        return "idle"
