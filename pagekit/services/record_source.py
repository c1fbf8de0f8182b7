# pagekit/services/record_source.py
"""
In-memory record collection that answers page requests.

Serves as the reference fetch capability: the demo app and the tests plug
it straight into PaginationController.configure().
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from pagekit.interfaces.fetcher import PageFetcher
from pagekit.models.pagination import PageRequest, PageResult

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RecordSource(PageFetcher):
    """Searchable, filterable list of dict records."""

    def __init__(
        self,
        records: Iterable[Record] = (),
        *,
        search_fields: Sequence[str] = ("title",),
        name: str = "records",
    ) -> None:
        self._records: List[Record] = list(records)
        self._search_fields = tuple(search_fields)
        self.name = name

    # --------------------------------------------------------------------- #
    # read side
    # --------------------------------------------------------------------- #

    def page(self, request: PageRequest) -> PageResult[Record]:
        """Return one page of the records matching the request's criteria."""
        matching = [
            record for record in self._records
            if self._matches_search(record, request.search_term)
            and self._matches_filters(record, request.filters)
        ]
        start = request.offset
        items = matching[start:start + request.page_size]

        result = PageResult(
            items=items,
            total_count=len(matching),
            page=request.page,
            page_size=request.page_size,
        )
        logger.debug(
            f"{self.name}: page {request.page} of {result.pages} -> {len(items)} of {len(matching)} "
            f"(search={request.search_term!r}, filters={dict(request.filters)}, more={result.has_next()})"
        )
        return result

    def fetch_page(self, request: PageRequest) -> PageResult[Record]:
        return self.page(request)

    def __len__(self) -> int:
        return len(self._records)

    # --------------------------------------------------------------------- #
    # write side
    # --------------------------------------------------------------------- #

    def add(self, record: Record) -> None:
        self._records.append(dict(record))

    def remove(self, predicate: Callable[[Record], bool]) -> int:
        """Delete every record the predicate accepts; returns how many went."""
        before = len(self._records)
        self._records = [record for record in self._records if not predicate(record)]
        return before - len(self._records)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _matches_search(self, record: Record, term: Optional[str]) -> bool:
        if not term:
            return True
        needle = term.lower()
        return any(
            needle in str(record.get(field, "")).lower()
            for field in self._search_fields
        )

    @staticmethod
    def _matches_filters(record: Record, filters: Mapping[str, Any]) -> bool:
        for field, expected in filters.items():
            value = record.get(field)
            if isinstance(expected, (list, tuple, set, frozenset)):
                if value not in expected:
                    return False
            elif value != expected:
                return False
        return True
