from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict

from ..domain import Todo


# PUBLIC_INTERFACE
class TodoRecord(TypedDict):
    """
    Stored shape of a todo row, shared by the in-memory and SQLite backends.

    Fields:
    - id: Unique integer identifier, assigned on insert
    - title: Title text as validated by the domain (1..100 chars, trimmed)
    - description: Optional description, None when empty
    - status: One of PENDING, IN_PROGRESS, COMPLETED
    - created_at: UTC creation timestamp
    - updated_at: UTC last update timestamp
    """

    id: int
    title: str
    description: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime


# PUBLIC_INTERFACE
def to_domain(record: TodoRecord) -> Todo:
    """Rehydrate a stored record into a Todo without re-validating it."""
    return Todo.reconstruct(
        record["id"],
        record["title"],
        record["description"],
        record["status"],
        record["created_at"],
        record["updated_at"],
    )


# PUBLIC_INTERFACE
def to_record(todo: Todo, todo_id: int) -> TodoRecord:
    """Flatten a Todo into a storable record under the given id."""
    return {
        "id": todo_id,
        "title": todo.title,
        "description": todo.description,
        "status": todo.status.value,
        "created_at": todo.created_at,
        "updated_at": todo.updated_at,
    }
