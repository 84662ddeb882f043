from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from .entities import Todo
from .value_objects import TodoStatusType

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationOptions:
    """
    Requested page window. Omitted values fall back to page 1, limit 10.
    """
    page: Optional[int] = None
    limit: Optional[int] = None

    def resolve(self) -> tuple[int, int]:
        page = self.page if self.page is not None else DEFAULT_PAGE
        limit = self.limit if self.limit is not None else DEFAULT_LIMIT
        return max(page, 1), max(limit, 0)


@dataclass(frozen=True)
class TodoFilterOptions:
    """
    Filters for listing todos.
    """
    status: Optional[TodoStatusType] = None
    title_search: Optional[str] = None  # case-insensitive substring match


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    data: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0


# PUBLIC_INTERFACE
def total_pages(total: int, limit: int) -> int:
    """Return ceil(total / limit), or 0 for a zero limit."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


# PUBLIC_INTERFACE
class TodoRepository(ABC):
    """
    Persistence contract the use cases depend on.

    Implementations must return None from `find_by_id` for a missing row rather
    than raising; turning absence into an error is the use case's job.
    """

    @abstractmethod
    def find_all(
        self,
        pagination: Optional[PaginationOptions] = None,
        filter: Optional[TodoFilterOptions] = None,
    ) -> PaginatedResult[Todo]:
        """Return one page of todos matching the filter, newest first."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        """Return the Todo with the given id, or None if not found."""

    @abstractmethod
    def find_by_status(self, status: TodoStatusType) -> List[Todo]:
        """Return every todo currently in `status`, newest first."""

    @abstractmethod
    def save(self, todo: Todo) -> Todo:
        """Insert a new todo and return it with its assigned id."""

    @abstractmethod
    def update(self, todo: Todo) -> Todo:
        """Persist title, description, status and updated_at of an existing todo."""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Remove the todo with the given id."""

    @abstractmethod
    def count(self, filter: Optional[TodoFilterOptions] = None) -> int:
        """Return the number of todos matching the filter."""
