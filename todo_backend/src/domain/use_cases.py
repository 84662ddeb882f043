from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .entities import UNSET, Todo
from .errors import TodoNotFoundError
from .repositories import PaginatedResult, PaginationOptions, TodoFilterOptions, TodoRepository


@dataclass(frozen=True)
class CreateTodoCommand:
    title: str
    description: Optional[str] = None


@dataclass(frozen=True)
class UpdateTodoCommand:
    """
    Partial update request. Fields left as UNSET are not touched;
    `description=None` clears the description.
    """
    id: int
    title: Any = UNSET
    description: Any = UNSET
    status: Any = UNSET


@dataclass(frozen=True)
class GetTodosQuery:
    pagination: Optional[PaginationOptions] = None
    filter: Optional[TodoFilterOptions] = None


def _load_or_raise(repository: TodoRepository, todo_id: int) -> Todo:
    todo = repository.find_by_id(todo_id)
    if todo is None:
        raise TodoNotFoundError(todo_id)
    return todo


# PUBLIC_INTERFACE
class CreateTodoUseCase:
    """Validate and persist a new todo."""

    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, command: CreateTodoCommand) -> Todo:
        todo = Todo.create(command.title, command.description)
        return self._repository.save(todo)


# PUBLIC_INTERFACE
class GetTodoByIdUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, todo_id: int) -> Todo:
        return _load_or_raise(self._repository, todo_id)


# PUBLIC_INTERFACE
class GetTodosUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, query: Optional[GetTodosQuery] = None) -> PaginatedResult[Todo]:
        q = query or GetTodosQuery()
        return self._repository.find_all(q.pagination or PaginationOptions(), q.filter)


# PUBLIC_INTERFACE
class UpdateTodoUseCase:
    """
    Load a todo, apply a partial update and persist it.

    Validation errors from the entity surface before the repository write.
    """

    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, command: UpdateTodoCommand) -> Todo:
        todo = _load_or_raise(self._repository, command.id)
        todo.update(
            title=command.title,
            description=command.description,
            status=command.status,
        )
        return self._repository.update(todo)


# PUBLIC_INTERFACE
class DeleteTodoUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, todo_id: int) -> None:
        # delete() does not report a missing id on every backend.
        _load_or_raise(self._repository, todo_id)
        self._repository.delete(todo_id)


# PUBLIC_INTERFACE
class ToggleTodoUseCase:
    def __init__(self, repository: TodoRepository) -> None:
        self._repository = repository

    def execute(self, todo_id: int) -> Todo:
        todo = _load_or_raise(self._repository, todo_id)
        todo.toggle_complete()
        return self._repository.update(todo)
