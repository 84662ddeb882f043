from __future__ import annotations

import logging
from functools import lru_cache
from threading import RLock
from typing import Dict, List, Optional

from ..domain import (
    PaginatedResult,
    PaginationOptions,
    Todo,
    TodoFilterOptions,
    TodoNotFoundError,
    TodoRepository,
    TodoStatusType,
)
from ..domain.repositories import total_pages
from .models import TodoRecord, to_domain, to_record
from .settings import get_settings

logger = logging.getLogger(__name__)


def _matches(record: TodoRecord, filter: Optional[TodoFilterOptions]) -> bool:
    if filter is None:
        return True
    if filter.status is not None and record["status"] != TodoStatusType(filter.status).value:
        return False
    if filter.title_search:
        if filter.title_search.lower() not in record["title"].lower():
            return False
    return True


class InMemoryTodoRepository(TodoRepository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.

    Records are stored as plain dicts; every read rehydrates a fresh Todo so
    callers never share entity instances with the store.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[int, TodoRecord] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def _newest_first(self, filter: Optional[TodoFilterOptions]) -> List[TodoRecord]:
        with self._lock:
            items = [r for r in self._items.values() if _matches(r, filter)]
        # id breaks ties between todos created within the same clock tick
        return sorted(items, key=lambda r: (r["created_at"], r["id"]), reverse=True)

    def find_all(
        self,
        pagination: Optional[PaginationOptions] = None,
        filter: Optional[TodoFilterOptions] = None,
    ) -> PaginatedResult[Todo]:
        page, limit = (pagination or PaginationOptions()).resolve()
        items = self._newest_first(filter)
        start = (page - 1) * limit
        window = items[start:start + limit]
        return PaginatedResult(
            data=[to_domain(r) for r in window],
            total=len(items),
            page=page,
            limit=limit,
            total_pages=total_pages(len(items), limit),
        )

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._lock:
            record = self._items.get(todo_id)
            return None if record is None else to_domain(record)

    def find_by_status(self, status: TodoStatusType) -> List[Todo]:
        return [to_domain(r) for r in self._newest_first(TodoFilterOptions(status=status))]

    def save(self, todo: Todo) -> Todo:
        record = to_record(todo, self._allocate_id())
        with self._lock:
            self._items[record["id"]] = record
        logger.debug("Stored todo id=%s", record["id"])
        return to_domain(record)

    def update(self, todo: Todo) -> Todo:
        if todo.id is None:
            raise ValueError("Cannot update a todo that has not been saved")
        with self._lock:
            existing = self._items.get(todo.id)
            if existing is None:
                raise TodoNotFoundError(todo.id)
            updated = to_record(todo, todo.id)
            # created_at is owned by the store once the row exists
            updated["created_at"] = existing["created_at"]
            self._items[todo.id] = updated
            return to_domain(updated)

    def delete(self, todo_id: int) -> None:
        with self._lock:
            self._items.pop(todo_id, None)

    def count(self, filter: Optional[TodoFilterOptions] = None) -> int:
        with self._lock:
            return sum(1 for r in self._items.values() if _matches(r, filter))


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> TodoRepository:
    """
    Return the configured repository based on settings, created once per process.
    - memory: InMemoryTodoRepository
    - sqlite: SQLiteTodoRepository (standard library sqlite3)

    Call `get_repository.cache_clear()` to rebuild it after changing settings.
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteTodoRepository

        logger.info("Using SQLite todo repository at %s", settings.sqlite_db_path)
        return SQLiteTodoRepository(settings.sqlite_db_path)
    logger.info("Using in-memory todo repository")
    return InMemoryTodoRepository()
