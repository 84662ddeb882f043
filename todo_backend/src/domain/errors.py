from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict


# PUBLIC_INTERFACE
class DomainError(Exception):
    """
    Base class for every failure raised by the todo domain.

    Each error carries a stable machine-readable `code` and a human-readable
    `message`; the presentation layer maps codes to transport status codes.
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


# PUBLIC_INTERFACE
class TodoNotFoundError(DomainError):
    """Raised when a todo with the requested id does not exist."""

    code = "TODO_NOT_FOUND"

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Todo with id {todo_id} was not found")
        self.todo_id = todo_id

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "todo_id": self.todo_id}


# PUBLIC_INTERFACE
class InvalidTodoTitleError(DomainError):
    """
    Raised when a title fails validation.

    Use the `empty`, `too_short` and `too_long` constructors so the reason text
    stays consistent.
    """

    code = "INVALID_TODO_TITLE"

    def __init__(self, title: str, reason: str) -> None:
        super().__init__(f"Invalid todo title: {reason}")
        self.invalid_title = title
        self.reason = reason

    @classmethod
    def empty(cls) -> "InvalidTodoTitleError":
        return cls("", "title must not be empty")

    @classmethod
    def too_short(cls, title: str, min_length: int) -> "InvalidTodoTitleError":
        return cls(
            title,
            f"title must be at least {min_length} characters (got {len(title)})",
        )

    @classmethod
    def too_long(cls, title: str, max_length: int) -> "InvalidTodoTitleError":
        return cls(
            title,
            f"title must not exceed {max_length} characters (got {len(title)})",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "invalid_title": self.invalid_title, "reason": self.reason}


# PUBLIC_INTERFACE
class InvalidStatusTransitionError(DomainError):
    """Raised when a status change is not permitted from the current status."""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current_status: str, target_status: str) -> None:
        super().__init__(
            f"Cannot change status from '{current_status}' to '{target_status}'"
        )
        self.current_status = current_status
        self.target_status = target_status

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "current_status": self.current_status,
            "target_status": self.target_status,
        }


# PUBLIC_INTERFACE
class InvalidTodoStatusError(DomainError, ValueError):
    """Raised when a raw string is not one of the defined status literals."""

    code = "INVALID_TODO_STATUS"

    def __init__(self, value: Any, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid todo status: '{value}'. Allowed values: {', '.join(allowed)}"
        )
        self.value = value
