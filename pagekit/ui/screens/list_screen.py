# pagekit/ui/screens/list_screen.py
"""
Infinite-scroll list screen bound to one PaginationController key
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from pagekit.core.controller import PaginationController
from pagekit.errors import FetchFailure
from pagekit.models.pagination import ListState
from pagekit.ui.controllers.status_bar import StatusBarController
from pagekit.ui.widgets.list_status import ListStatus
from pagekit.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger


class ListScreen(Screen):
    """Renders one paged list and forwards user intent to the controller."""

    BINDINGS = [
        Binding("n", "load_more", "Load More", show=True),
        Binding("r", "refresh_list", "Refresh", show=True),
        Binding("f", "focus_search", "Search", show=True),
        Binding("t", "cycle_filter", "Filter", show=True),
        Binding("x", "reset_list", "Reset", show=True),
    ]

    def __init__(
        self,
        controller: PaginationController,
        key: Hashable,
        columns: Sequence[str],
        *,
        filter_presets: Optional[List[Dict[str, Any]]] = None,
        id: str = "list_screen",
    ) -> None:
        super().__init__(id=id)
        self.controller = controller
        self.key = key
        self.columns = tuple(columns)
        self.filter_presets = filter_presets or [{}]
        self._filter_index = 0

        self._rendered_generation = -1
        self._rendered_count = 0
        self._last_error: Optional[FetchFailure] = None
        self._unsubscribe: Optional[Callable[[], bool]] = None

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Container(id="main-container"):
            with Vertical(id="content-area"):
                yield SearchBar(placeholder=f"Search {self.key}...", id="search-bar")
                yield DataTable(id="records-table", cursor_type="row", zebra_stripes=True)
                yield ListStatus(id="list-status")

        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_columns(*(column.title() for column in self.columns))
        table.styles.height = "1fr"

        self.status_controller = StatusBarController(self.query_one("#status-bar", Static))
        self._unsubscribe = self.controller.subscribe(self.key, self.render_state)
        self.render_state(self.controller.get_state(self.key))

        if not self.controller.is_configured(self.key):
            Slogger.error(f"List '{self.key}' has no data source")
            self.notify(f"No data source for {self.key}", title="Load Failed", severity="error")
            return
        if self.controller.get_state(self.key).current_page < 0:
            self._dispatch(self.controller.refresh(self.key), "refresh")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    def render_state(self, state: ListState) -> None:
        """Bring the table, footer and status bar in line with a snapshot."""
        table = self.query_one(DataTable)

        # New session or shrunk list: start the table over
        if state.generation != self._rendered_generation or state.loaded_count < self._rendered_count:
            table.clear()
            self._rendered_generation = state.generation
            self._rendered_count = 0

        for index in range(self._rendered_count, state.loaded_count):
            record = state.items[index]
            table.add_row(*(str(record.get(column, "")) for column in self.columns), key=str(index))
        self._rendered_count = state.loaded_count

        self.query_one(ListStatus).update_state(state)
        self.status_controller.update(self.key, state)

        if state.error is not None and state.error is not self._last_error:
            self.notify(
                f"Could not load page {state.error.page}: {state.error.message}",
                title="Load Failed",
                severity="error",
                timeout=5,
            )
        self._last_error = state.error

    # ------------------------------------------------------------------ #
    # Action handlers
    # ------------------------------------------------------------------ #

    def action_load_more(self) -> None:
        self._dispatch(self.controller.load_next_page(self.key), "load_more")

    def action_refresh_list(self) -> None:
        self._dispatch(self.controller.refresh(self.key), "refresh")

    def action_focus_search(self) -> None:
        self.query_one(SearchBar).focus_input()

    def action_cycle_filter(self) -> None:
        self._filter_index = (self._filter_index + 1) % len(self.filter_presets)
        filters = self.filter_presets[self._filter_index]
        label = ", ".join(f"{k}={v}" for k, v in filters.items()) or "none"
        self.notify(f"Filter: {label}", title="Filter Changed")
        self._dispatch(self.controller.set_filters(self.key, filters), "filter")

    def action_reset_list(self) -> None:
        self.controller.reset(self.key)
        self._filter_index = 0
        self.notify("List cleared", title="Reset")

    # ------------------------------------------------------------------ #
    # Event handlers
    # ------------------------------------------------------------------ #

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        self._dispatch(self.controller.set_search(self.key, event.query), "search")

    def on_list_status_load_more_requested(self, event: ListStatus.LoadMoreRequested) -> None:
        self.action_load_more()

    def on_list_status_refresh_requested(self, event: ListStatus.RefreshRequested) -> None:
        self.action_refresh_list()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        # Reaching the last loaded row pulls in the next page
        state = self.controller.get_state(self.key)
        if event.cursor_row >= state.loaded_count - 1 and state.has_more and not state.is_loading:
            self.action_load_more()

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _dispatch(self, operation, name: str) -> None:
        """Run a controller coroutine in a worker; results arrive via subscribe()."""
        state = self.controller.get_state(self.key)
        Slogger.debug(f"Dispatching {name}", {"key": self.key, **state.as_dict()})
        self.run_worker(operation, group=f"list-{self.key}", name=name)
