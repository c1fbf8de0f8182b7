# pagekit/interfaces/fetcher.py

from typing import Any, Awaitable, Callable, Union

from ..models.pagination import PageRequest, PageResult

# Anything the controller can call to get a page: plain functions, bound
# methods, coroutine functions, or PageFetcher instances.
FetchCapability = Callable[[PageRequest], Union[PageResult[Any], Awaitable[PageResult[Any]]]]


class PageFetcher:
    """Interface for a backend that answers page requests."""

    def fetch_page(self, request: PageRequest) -> Union[PageResult[Any], Awaitable[PageResult[Any]]]:
        """
        Fetch one page of a list.

        Args:
            request: Page index, page size and the criteria in effect

        Returns:
            A PageResult, or an awaitable resolving to one

        Raises:
            NetworkError: If the backend cannot be reached (from pagekit.errors)
            Any other exception for server or deserialization failures
        """
        raise NotImplementedError("Subclasses must implement this method")

    def __call__(self, request: PageRequest) -> Union[PageResult[Any], Awaitable[PageResult[Any]]]:
        return self.fetch_page(request)
