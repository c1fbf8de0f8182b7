# pagekit/core/mock_fetcher.py

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from ..errors import NetworkError
from ..interfaces.fetcher import PageFetcher
from ..models.pagination import PageRequest, PageResult
from ..services.record_source import RecordSource

logger = logging.getLogger(__name__)

class MockFetcher(PageFetcher):
    """
    Async fetch capability over a RecordSource, with simulated latency and
    simulated network failures for chosen pages.
    """

    def __init__(
        self,
        source: RecordSource,
        *,
        delay: float = 0.0,
        fail_pages: Optional[Set[int]] = None,
    ):
        self.source = source
        self.delay = delay
        self.fail_pages: Set[int] = set(fail_pages or ())
        self.requests: List[PageRequest] = []
        self._gate: Optional[asyncio.Event] = None
        logger.info(f"MockFetcher initialized for '{source.name}' (delay={delay}s)")

    @property
    def fetch_count(self) -> int:
        return len(self.requests)

    def pause(self) -> None:
        """Hold every fetch at its network step until resume() is called."""
        if self._gate is None or self._gate.is_set():
            self._gate = asyncio.Event()

    def resume(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def fetch_page(self, request: PageRequest) -> PageResult[Dict[str, Any]]:
        self.requests.append(request)

        if self.delay:
            await asyncio.sleep(self.delay)
        if self._gate is not None:
            await self._gate.wait()

        if request.page in self.fail_pages:
            logger.info(f"MockFetcher: simulating network error for page {request.page}")
            raise NetworkError(f"Simulated network error on page {request.page}")

        return self.source.page(request)
