"""
Load-more footer for a paged list
"""

from typing import Optional

from rich.text import Text
from textual.containers import Container
from textual.widgets import Button, Label
from textual.message import Message

from pagekit.models.pagination import ListState, UNKNOWN_TOTAL


class ListStatus(Container):
    """
    Shows how much of the list is loaded, with load-more and refresh buttons
    """

    DEFAULT_CSS = """
    ListStatus {
        layout: horizontal;
        height: 3;
        content-align: center middle;
        padding: 1 0;
    }

    ListStatus > Button {
        min-width: 5;
        margin: 0 1;
    }

    ListStatus > #progress-indicator {
        min-width: 24;
        content-align: center middle;
    }
    """

    class LoadMoreRequested(Message):
        """User asked for the next page"""

    class RefreshRequested(Message):
        """User asked to reload from page 0"""

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)

    def compose(self):
        """Create child widgets"""
        yield Button("⟳ Refresh", id="refresh-list", classes="list-button")
        yield Label("Nothing loaded", id="progress-indicator")
        yield Button("Load more ▼", id="load-more", classes="list-button")

    def update_state(self, state: ListState) -> None:
        """
        Reflect a controller snapshot

        Args:
            state: Current snapshot for the list being shown
        """
        self.query_one("#progress-indicator", Label).update(self.describe(state))

        load_more = self.query_one("#load-more", Button)
        load_more.disabled = state.is_loading or not state.has_more

    @staticmethod
    def describe(state: ListState) -> Text:
        if state.is_loading:
            return Text(f"Loading… ({state.loaded_count} loaded)", style="yellow")
        if state.error is not None:
            return Text(f"Failed on page {state.error.page} - retry", style="bold red")
        if state.total_count == UNKNOWN_TOTAL:
            return Text("Nothing loaded", style="dim")
        if state.is_empty:
            return Text("No matches", style="dim")

        text = Text()
        text.append(str(state.loaded_count), style="bold")
        text.append(" of ")
        text.append(str(state.total_count), style="bold")
        text.append(" loaded")
        return text

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses"""
        if event.button.id == "load-more":
            self.post_message(self.LoadMoreRequested())
        elif event.button.id == "refresh-list":
            self.post_message(self.RefreshRequested())
