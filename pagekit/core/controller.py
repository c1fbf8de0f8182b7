# pagekit/core/controller.py

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Generic, Hashable, List, Mapping, Optional, TypeVar

from ..errors import FetchFailure, UsageError
from ..events import EventType
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..interfaces.fetcher import FetchCapability
from ..models.pagination import ListState, PageRequest, PageResult
from .event_bus import EventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20


def _as_capability(fetch_page: Any) -> FetchCapability:
    """Accept a PageFetcher-like object or a plain callable."""
    method = getattr(fetch_page, "fetch_page", None)
    if callable(method):
        return method
    if callable(fetch_page):
        return fetch_page
    raise UsageError(f"fetch capability must be callable, got {type(fetch_page).__name__}")


def _check_page_size(page_size: Any) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise UsageError(f"page_size must be a positive integer, got {page_size!r}")
    return page_size


def _normalize_term(term: Optional[str]) -> Optional[str]:
    return term if term else None


class _KeyEntry:
    """Everything the controller owns for one key."""

    __slots__ = ("state", "fetch_page", "page_size", "blocking", "initial_search", "initial_filters")

    def __init__(
        self,
        fetch_page: Optional[FetchCapability],
        page_size: int,
        search_term: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.fetch_page = fetch_page
        self.page_size = page_size
        self.blocking = False
        self.initial_search = search_term
        self.initial_filters = dict(filters or {})
        self.state: ListState[Any] = ListState.initial(
            search_term=search_term, filters=self.initial_filters
        )


class PaginationController(Generic[T]):
    """
    Owns the paged-list state for any number of independent keys.

    Each key goes Idle -> Loading -> Idle, with at most one fetch in flight
    per session. refresh(), a differing set_search()/set_filters() and
    reset() start a new session; a fetch dispatched by an older session
    still runs to completion but its result is dropped.

    All methods must be called from the same event loop.
    """

    def __init__(
        self,
        fetch_page: Optional[Any] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        event_bus: Optional[EventBusInterface] = None,
    ) -> None:
        """
        Args:
            fetch_page: Default fetch capability for keys configured without one
            page_size: Default page size for keys configured without one
            event_bus: Where state changes are published (a private bus if omitted)
        """
        self._default_fetch = _as_capability(fetch_page) if fetch_page is not None else None
        self._default_page_size = _check_page_size(page_size)
        self.event_bus: EventBusInterface = event_bus if event_bus is not None else EventBus()
        self._entries: Dict[Hashable, _KeyEntry] = {}
        self._initial: ListState[T] = ListState.initial()
        logger.info(f"PaginationController initialized (default page_size={self._default_page_size})")

    # ------------------------------------------------------------------ #
    # configuration
    # ------------------------------------------------------------------ #

    def configure(
        self,
        key: Hashable,
        fetch_page: Optional[Any] = None,
        *,
        page_size: Optional[int] = None,
        search_term: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
        blocking: Optional[bool] = None,
    ) -> ListState[T]:
        """
        Bind a fetch capability, page size and starting criteria to a key.

        Arguments left as None keep their current value. Reconfiguring a key
        that already holds pages resets it when the page size or the criteria
        change, since loaded pages would no longer line up with the new
        requests.

        Args:
            key: List key
            fetch_page: Callable or PageFetcher answering PageRequests
            page_size: Items per page
            search_term: Search the key starts with, and returns to on reset()
            filters: Filters the key starts with, and returns to on reset()
            blocking: The capability is a synchronous call that may block
                (database, HTTP client); run it in a worker thread so other
                keys keep going. Sync capabilities otherwise run on the event
                loop, which is fine for in-memory sources.
        """
        capability = _as_capability(fetch_page) if fetch_page is not None else None
        size = _check_page_size(page_size) if page_size is not None else None
        term = _normalize_term(search_term)

        entry = self._entries.get(key)
        if entry is None:
            entry = _KeyEntry(
                capability or self._default_fetch,
                size or self._default_page_size,
                term,
                filters,
            )
            entry.blocking = bool(blocking)
            self._entries[key] = entry
            logger.debug(f"Configured key '{key}' (page_size={entry.page_size})")
            return entry.state

        if capability is not None:
            entry.fetch_page = capability
        if blocking is not None:
            entry.blocking = blocking

        needs_reset = False
        if size is not None and size != entry.page_size:
            entry.page_size = size
            needs_reset = True
        if search_term is not None:
            entry.initial_search = term
        if filters is not None:
            entry.initial_filters = dict(filters)
        if search_term is not None or filters is not None:
            if (entry.initial_search != entry.state.search_term
                    or entry.initial_filters != dict(entry.state.filters)):
                needs_reset = True

        if needs_reset:
            self._start_session(
                key, entry, search_term=entry.initial_search, filters=entry.initial_filters
            )
        return entry.state

    def is_configured(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.fetch_page is not None

    def keys(self) -> List[Hashable]:
        return list(self._entries.keys())

    # ------------------------------------------------------------------ #
    # observation
    # ------------------------------------------------------------------ #

    def get_state(self, key: Hashable) -> ListState[T]:
        """Current snapshot for a key; a key never seen gets the initial state."""
        entry = self._entries.get(key)
        if entry is None:
            return self._initial
        return entry.state

    def subscribe(self, key: Hashable, callback: Callable[[ListState[T]], Any]) -> Callable[[], bool]:
        """
        Call `callback(state)` after every transition of `key`.

        Returns:
            A function that removes the subscription
        """
        def listener(**event: Any) -> None:
            callback(event["state"])

        self.event_bus.subscribe_key(EventType.STATE_CHANGED, key, listener)
        return lambda: self.event_bus.unsubscribe_key(EventType.STATE_CHANGED, key, listener)

    # ------------------------------------------------------------------ #
    # operations
    # ------------------------------------------------------------------ #

    async def load_next_page(self, key: Hashable) -> ListState[T]:
        """Fetch the page after the last one loaded, unless busy or exhausted."""
        entry = self._require_fetchable(key)
        state = entry.state
        if state.is_loading:
            logger.debug(f"load_next_page('{key}') ignored: fetch already in flight")
            return state
        if not state.has_more:
            logger.debug(f"load_next_page('{key}') ignored: all {state.total_count} items loaded")
            return state
        return await self._fetch(key, entry, state.current_page + 1)

    async def refresh(self, key: Hashable) -> ListState[T]:
        """Drop loaded pages and fetch page 0 again under the same criteria."""
        entry = self._require_fetchable(key)
        self._start_session(
            key, entry, search_term=entry.state.search_term, filters=entry.state.filters
        )
        return await self._fetch(key, entry, 0)

    async def set_search(self, key: Hashable, term: Optional[str]) -> ListState[T]:
        entry = self._require_fetchable(key)
        term = _normalize_term(term)
        if term == entry.state.search_term:
            return entry.state
        self._start_session(key, entry, search_term=term, filters=entry.state.filters)
        return await self._fetch(key, entry, 0)

    async def set_filters(self, key: Hashable, filters: Optional[Mapping[str, Any]]) -> ListState[T]:
        entry = self._require_fetchable(key)
        filters = dict(filters or {})
        if filters == dict(entry.state.filters):
            return entry.state
        self._start_session(key, entry, search_term=entry.state.search_term, filters=filters)
        return await self._fetch(key, entry, 0)

    def reset(self, key: Hashable) -> ListState[T]:
        """
        Return a key to its configured starting point without fetching.

        Any fetch in flight for the key is orphaned and its result dropped.
        """
        entry = self._entries.get(key)
        if entry is None:
            return self._initial
        self._start_session(
            key, entry, search_term=entry.initial_search, filters=entry.initial_filters
        )
        return entry.state

    def release(self, key: Hashable) -> bool:
        """Forget a key entirely. Returns False if the key was unknown."""
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        logger.debug(f"Released key '{key}'")
        self.event_bus.publish(EventType.KEY_RELEASED, key=key)
        self.event_bus.publish(EventType.STATE_CHANGED, key=key, state=self._initial)
        return True

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _require_fetchable(self, key: Hashable) -> _KeyEntry:
        entry = self._entries.get(key)
        if entry is None:
            if self._default_fetch is None:
                raise UsageError(f"No fetch capability configured for key '{key}'")
            entry = _KeyEntry(self._default_fetch, self._default_page_size)
            self._entries[key] = entry
        elif entry.fetch_page is None:
            raise UsageError(f"No fetch capability configured for key '{key}'")
        return entry

    def _transition(self, key: Hashable, entry: _KeyEntry, new_state: ListState[T]) -> None:
        entry.state = new_state
        self.event_bus.publish(EventType.STATE_CHANGED, key=key, state=new_state)

    def _start_session(
        self,
        key: Hashable,
        entry: _KeyEntry,
        *,
        search_term: Optional[str],
        filters: Mapping[str, Any],
    ) -> None:
        generation = entry.state.generation + 1
        if entry.state.is_loading:
            logger.info(f"Key '{key}': session {generation} supersedes an in-flight fetch")
        logger.info(f"Key '{key}': new session {generation} (search={search_term!r}, filters={dict(filters)})")
        self.event_bus.publish(EventType.SESSION_RESET, key=key, generation=generation)
        self._transition(
            key,
            entry,
            ListState.initial(search_term=search_term, filters=filters, generation=generation),
        )

    def _is_current(self, key: Hashable, entry: _KeyEntry, generation: int) -> bool:
        return self._entries.get(key) is entry and entry.state.generation == generation

    async def _fetch(self, key: Hashable, entry: _KeyEntry, page: int) -> ListState[T]:
        state = entry.state
        generation = state.generation
        request = PageRequest(
            page=page,
            page_size=entry.page_size,
            search_term=state.search_term,
            filters=state.filters,
        )

        self._transition(key, entry, state.evolve(is_loading=True))
        self.event_bus.publish(EventType.FETCH_STARTED, key=key, page=page, generation=generation)
        logger.debug(f"Key '{key}': fetching page {page} (generation {generation})")

        try:
            if entry.blocking:
                result = await asyncio.to_thread(entry.fetch_page, request)
            else:
                result = entry.fetch_page(request)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, PageResult):
                raise TypeError(f"fetch capability returned {type(result).__name__}, expected PageResult")
        except asyncio.CancelledError:
            if self._is_current(key, entry, generation):
                self._transition(key, entry, entry.state.evolve(is_loading=False))
            raise
        except Exception as e:
            if not self._is_current(key, entry, generation):
                return self._discard(key, page, generation)
            failure = FetchFailure.from_exception(e, key=key, page=page)
            logger.error(f"Key '{key}': fetching page {page} failed: {failure.error_type} - {failure.message}")
            self._transition(key, entry, entry.state.evolve(is_loading=False, error=failure))
            self.event_bus.publish(
                EventType.FETCH_FAILED,
                key=key,
                page=page,
                generation=generation,
                error=failure,
            )
            return entry.state

        if not self._is_current(key, entry, generation):
            return self._discard(key, page, generation)

        self._transition(key, entry, self._apply(key, entry.state, result, page))
        self.event_bus.publish(
            EventType.FETCH_SUCCEEDED,
            key=key,
            page=page,
            generation=generation,
            item_count=len(result.items),
            total_count=entry.state.total_count,
        )
        return entry.state

    def _apply(self, key: Hashable, state: ListState[T], result: PageResult[T], page: int) -> ListState[T]:
        if result.page != page:
            logger.warning(f"Key '{key}': asked for page {page}, backend answered page {result.page}")

        items = state.items + tuple(result.items)
        total = result.total_count
        if total < len(items):
            logger.warning(f"Key '{key}': backend total {total} is below the {len(items)} items loaded")
            total = len(items)
        elif not result.items and total > len(items):
            # An empty page means the list ended, whatever the total says
            logger.warning(f"Key '{key}': page {page} came back empty with total {total}, treating list as complete")
            total = len(items)

        return state.evolve(
            items=items,
            current_page=page,
            total_count=total,
            is_loading=False,
            error=None,
        )

    def _discard(self, key: Hashable, page: int, generation: int) -> ListState[T]:
        logger.warning(f"Key '{key}': dropping stale result for page {page} (generation {generation})")
        self.event_bus.publish(EventType.FETCH_DISCARDED, key=key, page=page, generation=generation)
        return self.get_state(key)
