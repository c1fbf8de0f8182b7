# pagekit/errors.py

from typing import Any, Optional


class PaginationError(Exception):
    """Base class for all pagekit errors."""
    pass


class UsageError(PaginationError):
    """The controller was called in a way its contract does not allow."""
    pass


class ConfigError(PaginationError):
    """Error related to configuration."""
    pass


class NetworkError(PaginationError):
    """Error raised by a fetch capability when the backend is unreachable."""
    pass


class FetchFailure(PaginationError):
    """
    A fetch capability failed for one page.

    Never raised out of the controller; it is stored on the key's
    ListState so the UI can offer a retry.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Any = None,
        page: Optional[int] = None,
        error_type: str = "Exception",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.key = key
        self.page = page
        self.error_type = error_type
        self.cause = cause

    @classmethod
    def from_exception(cls, exc: BaseException, *, key: Any, page: int) -> "FetchFailure":
        return cls(str(exc) or type(exc).__name__, key=key, page=page,
                   error_type=type(exc).__name__, cause=exc)

    def __repr__(self) -> str:
        return f"FetchFailure(key={self.key!r}, page={self.page}, {self.error_type}: {self.message})"
