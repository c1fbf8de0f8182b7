"""
Main Textual application class for browsing the sample lists
"""

from __future__ import annotations

from typing import Dict, Any, Optional

from simple_logger import Slogger

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from pagekit.config import save_config
from pagekit.di import build_container, Container
from pagekit.errors import ConfigError
from pagekit.services.sample_data import FILTER_PRESETS, SAMPLE_LISTS
from pagekit.ui.screens.list_screen import ListScreen


class PagedListApp(App):
    """Terminal browser for the paged sample lists."""

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("l", "switch_list", "Switch List", show=True),
    ]

    def __init__(
        self,
        config: Dict[str, Any],
        container: Optional[Container] = None,
        config_file: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.config = config
        # where the last viewed list is remembered; None keeps it in memory
        self.config_file = config_file
        self.container: Container = container or build_container(config)

        self.list_key = config.get("ui", {}).get("list_key", "breed_logs")
        if self.list_key not in SAMPLE_LISTS:
            raise ConfigError(f"Unknown list '{self.list_key}', expected one of {sorted(SAMPLE_LISTS)}")

    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        theme = self.config.get("ui", {}).get("theme", "dark")
        self.theme = "textual-light" if theme == "light" else "textual-dark"
        self.push_screen(self._build_screen(self.list_key))

    def action_switch_list(self) -> None:
        keys = sorted(SAMPLE_LISTS)
        self.list_key = keys[(keys.index(self.list_key) + 1) % len(keys)]
        Slogger.info(f"Switching to list '{self.list_key}'")
        self.switch_screen(self._build_screen(self.list_key))

        self.config.setdefault("ui", {})["list_key"] = self.list_key
        if self.config_file:
            save_config(self.config, self.config_file)

    def _build_screen(self, key: str) -> ListScreen:
        _factory, _search_fields, columns = SAMPLE_LISTS[key]
        return ListScreen(
            self.container.controller,
            key,
            columns,
            filter_presets=FILTER_PRESETS.get(key),
            id=f"list_{key}",
        )
