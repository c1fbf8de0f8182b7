# pagekit/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Dict, Any

from pagekit.core.controller import PaginationController
from pagekit.core.event_bus import EventBus
from pagekit.core.mock_fetcher import MockFetcher
from pagekit.services.record_source import RecordSource
from pagekit.services.sample_data import SAMPLE_LISTS


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self._cfg = config
        self._event_bus: EventBus | None = None
        self._record_sources: Dict[str, RecordSource] | None = None
        self._fetchers: Dict[str, MockFetcher] | None = None
        self._controller: PaginationController | None = None

    # ---------- infra ----------
    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            self._event_bus = EventBus(
                debug_logging=self._cfg.get("pagination", {}).get("debug_events", False)
            )
        return self._event_bus

    # ---------- data sources ----------
    @property
    def record_sources(self) -> Dict[str, RecordSource]:
        if self._record_sources is None:
            self._record_sources = {
                key: RecordSource(factory(), search_fields=search_fields, name=key)
                for key, (factory, search_fields, _columns) in SAMPLE_LISTS.items()
            }
        return self._record_sources

    @property
    def fetchers(self) -> Dict[str, MockFetcher]:
        if self._fetchers is None:
            delay = self._cfg.get("ui", {}).get("fetch_delay", 0.0)
            self._fetchers = {
                key: MockFetcher(source, delay=delay)
                for key, source in self.record_sources.items()
            }
        return self._fetchers

    # ---------- controller ----------
    @property
    def controller(self) -> PaginationController:
        if self._controller is None:
            self._controller = PaginationController(
                page_size=self._cfg.get("pagination", {}).get("page_size", 20),
                event_bus=self.event_bus,
            )
            for key, fetcher in self.fetchers.items():
                self._controller.configure(key, fetcher)
        return self._controller


# convenience factory
def build_container(config: Dict[str, Any]) -> Container:
    """Create a container for the given config."""
    return Container(config)
