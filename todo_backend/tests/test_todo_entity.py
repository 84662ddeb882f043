from datetime import datetime, timezone

import pytest

from src.domain import (
    InvalidStatusTransitionError,
    InvalidTodoStatusError,
    InvalidTodoTitleError,
    Todo,
    TodoStatusType,
)

EARLIER = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def stored(status="PENDING", todo_id=1, title="장보기", description=None):
    """A todo loaded from storage with timestamps safely in the past."""
    return Todo.reconstruct(todo_id, title, description, status, EARLIER, EARLIER)


class TestCreate:
    def test_create_defaults(self):
        todo = Todo.create("장보기")
        assert todo.status == TodoStatusType.PENDING
        assert todo.description is None
        assert todo.id is None
        assert todo.is_new() is True
        assert todo.created_at == todo.updated_at
        assert todo.created_at.tzinfo is not None

    def test_create_trims_title_and_blank_description(self):
        todo = Todo.create("  Read book  ", "   ")
        assert todo.title == "Read book"
        assert todo.description is None

    def test_create_rejects_blank_title(self):
        with pytest.raises(InvalidTodoTitleError):
            Todo.create("   ")

    def test_create_title_length_boundary(self):
        assert Todo.create("x" * 100).title == "x" * 100
        with pytest.raises(InvalidTodoTitleError):
            Todo.create("x" * 101)


class TestReconstruct:
    def test_reconstruct_trusts_stored_values(self):
        todo = Todo.reconstruct(7, "", "desc", "IN_PROGRESS", EARLIER, EARLIER)
        assert todo.id == 7
        assert todo.title == ""
        assert todo.status == TodoStatusType.IN_PROGRESS
        assert todo.is_new() is False

    def test_reconstruct_rejects_unknown_status(self):
        with pytest.raises(InvalidTodoStatusError):
            Todo.reconstruct(7, "x", None, "ARCHIVED", EARLIER, EARLIER)


class TestStatusBehaviour:
    def test_toggle_twice_returns_to_pending(self):
        todo = Todo.create("장보기")
        todo.toggle_complete()
        assert todo.status == TodoStatusType.COMPLETED
        todo.toggle_complete()
        assert todo.status == TodoStatusType.PENDING

    def test_toggle_from_in_progress_completes(self):
        todo = stored("IN_PROGRESS")
        todo.toggle_complete()
        assert todo.is_completed()

    def test_complete_is_idempotent(self):
        todo = stored("COMPLETED")
        todo.complete()
        assert todo.updated_at == EARLIER

    def test_complete_stamps_updated_at(self):
        todo = stored("PENDING")
        todo.complete()
        assert todo.is_completed()
        assert todo.updated_at > EARLIER
        assert todo.created_at == EARLIER

    def test_uncomplete(self):
        todo = stored("PENDING")
        todo.uncomplete()
        assert todo.updated_at == EARLIER

        todo = stored("IN_PROGRESS")
        todo.uncomplete()
        assert todo.status == TodoStatusType.PENDING
        assert todo.updated_at > EARLIER

    def test_change_status_to_same_state_is_noop(self):
        for state in TodoStatusType:
            todo = stored(state.value)
            todo.change_status(state)
            assert todo.status == state
            assert todo.updated_at == EARLIER

    def test_change_status_rejects_completed_to_in_progress(self):
        todo = stored("COMPLETED")
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            todo.change_status("IN_PROGRESS")
        assert exc_info.value.current_status == "COMPLETED"
        assert exc_info.value.target_status == "IN_PROGRESS"
        assert todo.status == TodoStatusType.COMPLETED
        assert todo.updated_at == EARLIER

    def test_change_status_allowed(self):
        todo = stored("PENDING")
        todo.change_status(TodoStatusType.IN_PROGRESS)
        assert todo.status == TodoStatusType.IN_PROGRESS
        assert todo.updated_at > EARLIER

    def test_queries_delegate_to_status(self):
        todo = stored("COMPLETED")
        assert todo.can_transition_to("PENDING")
        assert not todo.can_transition_to("IN_PROGRESS")
        assert todo.get_available_transitions() == [TodoStatusType.PENDING]


class TestContentBehaviour:
    def test_update_title_same_value_is_noop(self):
        todo = stored(title="Read")
        todo.update_title("  Read ")
        assert todo.updated_at == EARLIER

    def test_update_title_changes_title_and_updated_at(self):
        todo = stored(title="Read")
        todo.update_title("Write")
        assert todo.title == "Write"
        assert todo.updated_at > EARLIER

    def test_update_title_validates_first(self):
        todo = stored(title="Read")
        with pytest.raises(InvalidTodoTitleError):
            todo.update_title("")
        assert todo.title == "Read"

    @pytest.mark.parametrize("value", ["", None, "   "])
    def test_update_description_clears(self, value):
        todo = stored(description="notes")
        todo.update_description(value)
        assert todo.description is None
        assert todo.updated_at > EARLIER

    def test_update_description_same_value_is_noop(self):
        todo = stored(description="notes")
        todo.update_description(" notes ")
        assert todo.updated_at == EARLIER


class TestPartialUpdate:
    def test_only_provided_fields_change(self):
        todo = stored(title="Read", description="notes")
        todo.update(status="IN_PROGRESS")
        assert todo.title == "Read"
        assert todo.description == "notes"
        assert todo.status == TodoStatusType.IN_PROGRESS

    def test_explicit_none_clears_description(self):
        todo = stored(description="notes")
        todo.update(description=None)
        assert todo.description is None

    def test_no_fields_is_noop(self):
        todo = stored()
        todo.update()
        assert todo.updated_at == EARLIER

    def test_invalid_status_leaves_earlier_fields_untouched(self):
        todo = stored("COMPLETED", title="Read", description="notes")
        with pytest.raises(InvalidStatusTransitionError):
            todo.update(title="Write", description="other", status="IN_PROGRESS")
        assert todo.title == "Read"
        assert todo.description == "notes"
        assert todo.status == TodoStatusType.COMPLETED
        assert todo.updated_at == EARLIER

    def test_invalid_title_rejects_whole_update(self):
        todo = stored(title="Read")
        with pytest.raises(InvalidTodoTitleError):
            todo.update(title="", status="COMPLETED")
        assert todo.status == TodoStatusType.PENDING

    def test_all_fields_applied_together(self):
        todo = stored(title="Read")
        todo.update(title="Write", description="draft", status="COMPLETED")
        assert (todo.title, todo.description, todo.status) == ("Write", "draft", TodoStatusType.COMPLETED)
        assert todo.updated_at > EARLIER


class TestEquality:
    def test_same_id_is_equal(self):
        a = Todo.reconstruct(1, "A", None, "PENDING", EARLIER, EARLIER)
        b = Todo.reconstruct(1, "B", "other", "COMPLETED", EARLIER, EARLIER)
        assert a.equals(b)
        assert a == b

    def test_different_ids_are_not_equal(self):
        assert stored(todo_id=1) != stored(todo_id=2)

    def test_new_entities_use_identity(self):
        a = Todo.create("same")
        b = Todo.create("same")
        assert not a.equals(b)
        assert a.equals(a)
        assert b == b

    def test_new_and_persisted_are_not_equal(self):
        assert Todo.create("A") != stored()


class TestSnapshot:
    def test_snapshot_includes_derived_fields(self):
        snapshot = stored("PENDING", todo_id=3, title="Read").to_snapshot()
        assert snapshot["id"] == 3
        assert snapshot["status"] == "PENDING"
        assert snapshot["is_completed"] is False
        assert snapshot["available_transitions"] == ["IN_PROGRESS", "COMPLETED"]
        assert snapshot["created_at"] == EARLIER
