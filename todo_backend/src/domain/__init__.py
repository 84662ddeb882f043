"""
Todo domain package.

Framework-free core of the service: value objects, the Todo entity, the error
taxonomy, the repository contract and the use cases that orchestrate them.
"""

from .entities import UNSET, Todo
from .errors import (
    DomainError,
    InvalidStatusTransitionError,
    InvalidTodoStatusError,
    InvalidTodoTitleError,
    TodoNotFoundError,
)
from .repositories import (
    PaginatedResult,
    PaginationOptions,
    TodoFilterOptions,
    TodoRepository,
)
from .use_cases import (
    CreateTodoCommand,
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GetTodoByIdUseCase,
    GetTodosQuery,
    GetTodosUseCase,
    ToggleTodoUseCase,
    UpdateTodoCommand,
    UpdateTodoUseCase,
)
from .value_objects import TodoStatus, TodoStatusType, TodoTitle

__all__ = [
    "UNSET",
    "Todo",
    "DomainError",
    "InvalidStatusTransitionError",
    "InvalidTodoStatusError",
    "InvalidTodoTitleError",
    "TodoNotFoundError",
    "PaginatedResult",
    "PaginationOptions",
    "TodoFilterOptions",
    "TodoRepository",
    "CreateTodoCommand",
    "CreateTodoUseCase",
    "DeleteTodoUseCase",
    "GetTodoByIdUseCase",
    "GetTodosQuery",
    "GetTodosUseCase",
    "ToggleTodoUseCase",
    "UpdateTodoCommand",
    "UpdateTodoUseCase",
    "TodoStatus",
    "TodoStatusType",
    "TodoTitle",
]
