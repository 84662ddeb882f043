from datetime import datetime, timezone

import pytest

from src.api.repositories import InMemoryTodoRepository
from src.domain import (
    CreateTodoCommand,
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GetTodoByIdUseCase,
    GetTodosQuery,
    GetTodosUseCase,
    InvalidStatusTransitionError,
    InvalidTodoTitleError,
    PaginationOptions,
    TodoFilterOptions,
    TodoNotFoundError,
    TodoStatusType,
    ToggleTodoUseCase,
    UpdateTodoCommand,
    UpdateTodoUseCase,
)


class RecordingRepository(InMemoryTodoRepository):
    """In-memory repository that remembers which methods were called."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def find_all(self, pagination=None, filter=None):
        self.calls.append(("find_all", pagination, filter))
        return super().find_all(pagination, filter)

    def find_by_id(self, todo_id):
        self.calls.append(("find_by_id", todo_id))
        return super().find_by_id(todo_id)

    def save(self, todo):
        self.calls.append(("save", todo.title))
        return super().save(todo)

    def update(self, todo):
        self.calls.append(("update", todo.id))
        return super().update(todo)

    def delete(self, todo_id):
        self.calls.append(("delete", todo_id))
        return super().delete(todo_id)

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def repo():
    return RecordingRepository()


def seed(repo, title="장보기", description=None):
    todo = CreateTodoUseCase(repo).execute(CreateTodoCommand(title=title, description=description))
    repo.calls.clear()
    return todo


class TestCreateTodo:
    def test_create_persists_and_assigns_id(self, repo):
        todo = CreateTodoUseCase(repo).execute(CreateTodoCommand(title="  장보기 ", description="milk"))
        assert todo.id == 1
        assert todo.title == "장보기"
        assert todo.description == "milk"
        assert todo.status == TodoStatusType.PENDING
        assert repo.names() == ["save"]

    def test_invalid_title_never_reaches_repository(self, repo):
        with pytest.raises(InvalidTodoTitleError):
            CreateTodoUseCase(repo).execute(CreateTodoCommand(title="   "))
        assert repo.calls == []


class TestGetTodoById:
    def test_returns_existing(self, repo):
        created = seed(repo)
        assert GetTodoByIdUseCase(repo).execute(created.id) == created

    def test_missing_id_raises_not_found(self, repo):
        with pytest.raises(TodoNotFoundError) as exc_info:
            GetTodoByIdUseCase(repo).execute(999)
        assert exc_info.value.todo_id == 999
        assert exc_info.value.code == "TODO_NOT_FOUND"


class TestGetTodos:
    def test_defaults_to_first_page_of_ten(self, repo):
        for i in range(12):
            seed(repo, title=f"Task {i}")
        result = GetTodosUseCase(repo).execute()
        assert result.page == 1
        assert result.limit == 10
        assert result.total == 12
        assert result.total_pages == 2
        assert len(result.data) == 10

    def test_passes_pagination_and_filter_through(self, repo):
        for i in range(5):
            seed(repo, title=f"Task {i}")
        pagination = PaginationOptions(page=2, limit=2)
        status_filter = TodoFilterOptions(status=TodoStatusType.PENDING)
        result = GetTodosUseCase(repo).execute(GetTodosQuery(pagination=pagination, filter=status_filter))
        assert repo.calls[-1] == ("find_all", pagination, status_filter)
        assert result.page == 2
        assert len(result.data) == 2
        assert result.total_pages == 3


class TestUpdateTodo:
    def test_updates_provided_fields(self, repo):
        created = seed(repo, description="notes")
        updated = UpdateTodoUseCase(repo).execute(
            UpdateTodoCommand(id=created.id, title="Groceries", status=TodoStatusType.IN_PROGRESS)
        )
        assert updated.title == "Groceries"
        assert updated.description == "notes"
        assert updated.status == TodoStatusType.IN_PROGRESS
        assert repo.names() == ["find_by_id", "update"]

    def test_explicit_none_clears_description(self, repo):
        created = seed(repo, description="notes")
        updated = UpdateTodoUseCase(repo).execute(UpdateTodoCommand(id=created.id, description=None))
        assert updated.description is None

    def test_empty_title_fails_before_write(self, repo):
        created = seed(repo)
        with pytest.raises(InvalidTodoTitleError):
            UpdateTodoUseCase(repo).execute(UpdateTodoCommand(id=created.id, title=""))
        assert "update" not in repo.names()
        assert GetTodoByIdUseCase(repo).execute(created.id).title == "장보기"

    def test_disallowed_transition_fails_before_write(self, repo):
        created = seed(repo)
        ToggleTodoUseCase(repo).execute(created.id)
        repo.calls.clear()
        with pytest.raises(InvalidStatusTransitionError):
            UpdateTodoUseCase(repo).execute(UpdateTodoCommand(id=created.id, status="IN_PROGRESS"))
        assert repo.names() == ["find_by_id"]

    def test_missing_id_raises_not_found(self, repo):
        with pytest.raises(TodoNotFoundError):
            UpdateTodoUseCase(repo).execute(UpdateTodoCommand(id=42, title="x"))
        assert repo.names() == ["find_by_id"]


class TestDeleteTodo:
    def test_checks_existence_then_deletes(self, repo):
        created = seed(repo)
        assert DeleteTodoUseCase(repo).execute(created.id) is None
        assert repo.names() == ["find_by_id", "delete"]
        assert repo.find_by_id(created.id) is None

    def test_missing_id_raises_without_delete(self, repo):
        with pytest.raises(TodoNotFoundError):
            DeleteTodoUseCase(repo).execute(5)
        assert "delete" not in repo.names()


class TestToggleTodo:
    def test_toggle_round_trip(self, repo):
        created = seed(repo)
        use_case = ToggleTodoUseCase(repo)
        first = use_case.execute(created.id)
        assert first.status == TodoStatusType.COMPLETED
        second = use_case.execute(created.id)
        assert second.status == TodoStatusType.PENDING
        assert repo.names() == ["find_by_id", "update", "find_by_id", "update"]

    def test_toggle_keeps_created_at(self, repo):
        created = seed(repo)
        toggled = ToggleTodoUseCase(repo).execute(created.id)
        assert toggled.created_at == created.created_at
        assert toggled.updated_at >= created.created_at

    def test_missing_id_raises_not_found(self, repo):
        with pytest.raises(TodoNotFoundError):
            ToggleTodoUseCase(repo).execute(1)


def test_not_found_error_serializes():
    err = TodoNotFoundError(3)
    data = err.to_dict()
    assert data["code"] == "TODO_NOT_FOUND"
    assert data["todo_id"] == 3
    datetime.fromisoformat(data["timestamp"]).astimezone(timezone.utc)
