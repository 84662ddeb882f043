from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import InvalidStatusTransitionError, InvalidTodoStatusError, InvalidTodoTitleError


# PUBLIC_INTERFACE
class TodoStatusType(str, Enum):
    """The status literals a todo can hold."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    def __str__(self) -> str:
        return self.value


StatusLike = Union[TodoStatusType, str]

# Directed: COMPLETED can only go back to PENDING.
_ALLOWED_TRANSITIONS: Dict[TodoStatusType, List[TodoStatusType]] = {
    TodoStatusType.PENDING: [TodoStatusType.IN_PROGRESS, TodoStatusType.COMPLETED],
    TodoStatusType.IN_PROGRESS: [TodoStatusType.COMPLETED, TodoStatusType.PENDING],
    TodoStatusType.COMPLETED: [TodoStatusType.PENDING],
}


def _coerce_status(value: StatusLike) -> TodoStatusType:
    if isinstance(value, TodoStatusType):
        return value
    try:
        return TodoStatusType(value)
    except ValueError:
        raise InvalidTodoStatusError(value, [s.value for s in TodoStatusType]) from None


# PUBLIC_INTERFACE
class TodoTitle:
    """
    Immutable, validated todo title.

    Build with `TodoTitle.create` for user input. `TodoTitle.reconstruct` skips
    validation and is only meant for values loaded from storage.
    """

    MIN_LENGTH = 1
    MAX_LENGTH = 100

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("TodoTitle is immutable")

    @classmethod
    def create(cls, value: Optional[str]) -> "TodoTitle":
        if value is None:
            raise InvalidTodoTitleError.empty()
        trimmed = value.strip()
        if len(trimmed) == 0:
            raise InvalidTodoTitleError.empty()
        if len(trimmed) < cls.MIN_LENGTH:
            raise InvalidTodoTitleError.too_short(trimmed, cls.MIN_LENGTH)
        if len(trimmed) > cls.MAX_LENGTH:
            raise InvalidTodoTitleError.too_long(trimmed, cls.MAX_LENGTH)
        return cls(trimmed)

    @classmethod
    def reconstruct(cls, value: str) -> "TodoTitle":
        return cls(value)

    @property
    def value(self) -> str:
        return self._value

    @property
    def length(self) -> int:
        return len(self._value)

    def equals(self, other: object) -> bool:
        return isinstance(other, TodoTitle) and self._value == other._value

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(("TodoTitle", self._value))

    def __len__(self) -> int:
        return len(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"TodoTitle({self._value!r})"


# PUBLIC_INTERFACE
class TodoStatus:
    """
    Immutable todo status that owns the transition rules.

    Transitions never mutate the receiver; `transition_to` returns a new
    instance. Self transitions are always rejected here, so callers that want
    "set to X" semantics must check for the current value first.
    """

    __slots__ = ("_value",)

    def __init__(self, value: TodoStatusType) -> None:
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("TodoStatus is immutable")

    @classmethod
    def create(cls, value: StatusLike) -> "TodoStatus":
        return cls(_coerce_status(value))

    @classmethod
    def default(cls) -> "TodoStatus":
        return cls(TodoStatusType.PENDING)

    @classmethod
    def from_string(cls, value: str) -> "TodoStatus":
        """Parse a raw status literal, raising InvalidTodoStatusError if unknown."""
        return cls(_coerce_status(value))

    @property
    def value(self) -> TodoStatusType:
        return self._value

    def can_transition_to(self, target: StatusLike) -> bool:
        target_value = _coerce_status(target)
        if target_value == self._value:
            return False
        return target_value in _ALLOWED_TRANSITIONS[self._value]

    def transition_to(self, target: StatusLike) -> "TodoStatus":
        target_value = _coerce_status(target)
        if not self.can_transition_to(target_value):
            raise InvalidStatusTransitionError(self._value.value, target_value.value)
        return TodoStatus(target_value)

    def get_available_transitions(self) -> List[TodoStatusType]:
        return list(_ALLOWED_TRANSITIONS[self._value])

    def is_pending(self) -> bool:
        return self._value == TodoStatusType.PENDING

    def is_in_progress(self) -> bool:
        return self._value == TodoStatusType.IN_PROGRESS

    def is_completed(self) -> bool:
        return self._value == TodoStatusType.COMPLETED

    def equals(self, other: object) -> bool:
        return isinstance(other, TodoStatus) and self._value == other._value

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(("TodoStatus", self._value))

    def __str__(self) -> str:
        return self._value.value

    def __repr__(self) -> str:
        return f"TodoStatus({self._value.value!r})"
