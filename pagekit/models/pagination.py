"""Page request/result containers and the per-key list state snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Generic, Mapping, Optional, Sequence, Tuple, TypeVar

from pagekit.errors import FetchFailure, UsageError

T = TypeVar("T")

UNKNOWN_TOTAL = -1
NO_PAGE = -1


@dataclass(frozen=True, slots=True)
class PageRequest:
    """What to fetch: one page of a list under the given criteria."""

    page: int                       # 0-based page index
    page_size: int
    search_term: Optional[str] = None
    filters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise UsageError(f"page must be >= 0, got {self.page}")
        if self.page_size <= 0:
            raise UsageError(f"page_size must be > 0, got {self.page_size}")
        # detach from the caller's dict
        object.__setattr__(self, "filters", dict(self.filters))

    @property
    def offset(self) -> int:
        return self.page * self.page_size


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """A single page of items plus meta-data, as returned by a fetch capability."""

    items: Sequence[T]
    total_count: int     # total items in the whole result set
    page: int            # page index this result answers (0-based)
    page_size: int

    def __post_init__(self) -> None:
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")

    # ------------- helpers -------------
    @property
    def pages(self) -> int:
        return max(1, (self.total_count + self.page_size - 1) // self.page_size)

    def has_next(self) -> bool:
        return self.page + 1 < self.pages


@dataclass(frozen=True, slots=True)
class ListState(Generic[T]):
    """
    Snapshot of one key's paged list.

    The controller never mutates a snapshot; every transition produces a new
    one, so a reader always sees a consistent state.
    """

    items: Tuple[T, ...] = ()
    current_page: int = NO_PAGE          # last page fetched successfully
    total_count: int = UNKNOWN_TOTAL     # last total reported by the backend
    is_loading: bool = False
    error: Optional[FetchFailure] = None
    search_term: Optional[str] = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    generation: int = 0                  # session generation

    def __post_init__(self) -> None:
        # readers get a view they cannot write through
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    @classmethod
    def initial(
        cls,
        *,
        search_term: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
        generation: int = 0,
    ) -> "ListState[T]":
        return cls(search_term=search_term, filters=filters or {}, generation=generation)

    # ------------- helpers -------------
    @property
    def loaded_count(self) -> int:
        return len(self.items)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def has_more(self) -> bool:
        """True while another page may exist (always true before the first fetch)."""
        if self.total_count == UNKNOWN_TOTAL:
            return True
        return len(self.items) < self.total_count

    @property
    def is_empty(self) -> bool:
        """True once a fetch has completed and produced nothing."""
        return self.total_count == 0

    def evolve(self, **changes: Any) -> "ListState[T]":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "loaded": len(self.items),
            "current_page": self.current_page,
            "total_count": self.total_count,
            "is_loading": self.is_loading,
            "error": self.error.message if self.error else None,
            "search_term": self.search_term,
            "filters": dict(self.filters),
            "generation": self.generation,
        }
