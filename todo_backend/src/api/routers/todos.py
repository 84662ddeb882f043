from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ...domain import (
    CreateTodoCommand,
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GetTodoByIdUseCase,
    GetTodosQuery,
    GetTodosUseCase,
    PaginationOptions,
    TodoFilterOptions,
    TodoRepository,
    TodoStatusType,
    ToggleTodoUseCase,
    UpdateTodoUseCase,
)
from ..repositories import get_repository
from ..schemas import PaginatedTodoOut, TodoCreate, TodoOut, TodoUpdate
from ..utils import pagination_envelope

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)

_NOT_FOUND = {404: {"description": "Todo not found"}}


def _get_repo(repo: TodoRepository = Depends(get_repository)) -> TodoRepository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item in PENDING status and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Title rejected by domain rules"},
    },
)
def create_todo(payload: TodoCreate, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo.
    """
    created = CreateTodoUseCase(repo).execute(
        CreateTodoCommand(title=payload.title, description=payload.description)
    )
    return TodoOut.from_entity(created)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=PaginatedTodoOut,
    summary="List Todos",
    description=(
        "List todos, newest first, with optional filters and pagination.\n\n"
        "Query parameters:\n"
        "- page: 1-based page number (default 1)\n"
        "- limit: page size (1..100, default 10)\n"
        "- status: PENDING, IN_PROGRESS or COMPLETED\n"
        "- search: case-insensitive substring match on the title\n\n"
        "Returns the page in `data` and paging information in `meta`."
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        422: {"description": "Invalid query parameters"},
    },
)
def list_todos(
    page: Optional[int] = Query(None, ge=1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of items per page"),
    status_filter: Optional[TodoStatusType] = Query(None, alias="status", description="Filter by status"),
    search: Optional[str] = Query(None, description="Search text for the title"),
    repo: TodoRepository = Depends(_get_repo),
) -> PaginatedTodoOut:
    """
    List todos with pagination and filters.
    """
    query = GetTodosQuery(
        pagination=PaginationOptions(page=page, limit=limit),
        filter=TodoFilterOptions(
            status=status_filter,
            title_search=search.strip() if search and search.strip() else None,
        ),
    )
    result = GetTodosUseCase(repo).execute(query)
    return PaginatedTodoOut(**pagination_envelope(result))


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={200: {"description": "Todo found"}, **_NOT_FOUND},
)
def get_todo(todo_id: int, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut.from_entity(GetTodoByIdUseCase(repo).execute(todo_id))


def _apply_update(todo_id: int, payload: TodoUpdate, repo: TodoRepository) -> TodoOut:
    updated = UpdateTodoUseCase(repo).execute(payload.to_command(todo_id))
    return TodoOut.from_entity(updated)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Update Todo",
    description=(
        "Update a Todo item. Only the fields present in the body are changed; "
        "send \"description\": null to clear the description."
    ),
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Title rejected by domain rules"},
        409: {"description": "Status transition not allowed"},
        **_NOT_FOUND,
    },
)
def put_todo(todo_id: int, payload: TodoUpdate, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    return _apply_update(todo_id, payload, repo)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Partially Update Todo",
    description="Partially update fields of a Todo item.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Title rejected by domain rules"},
        409: {"description": "Status transition not allowed"},
        **_NOT_FOUND,
    },
)
def patch_todo(todo_id: int, payload: TodoUpdate, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    """
    Partial update of a Todo item.
    """
    return _apply_update(todo_id, payload, repo)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}/toggle",
    response_model=TodoOut,
    summary="Toggle Todo",
    description="Mark a Todo as COMPLETED, or back to PENDING when it is already completed.",
    responses={200: {"description": "Todo toggled"}, **_NOT_FOUND},
)
def toggle_todo(todo_id: int, repo: TodoRepository = Depends(_get_repo)) -> TodoOut:
    return TodoOut.from_entity(ToggleTodoUseCase(repo).execute(todo_id))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={204: {"description": "Todo deleted"}, **_NOT_FOUND},
)
def delete_todo(todo_id: int, repo: TodoRepository = Depends(_get_repo)) -> Response:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    DeleteTodoUseCase(repo).execute(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
