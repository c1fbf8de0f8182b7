"""pagekit data models."""

from pagekit.models.pagination import ListState, PageRequest, PageResult

__all__ = ["ListState", "PageRequest", "PageResult"]
