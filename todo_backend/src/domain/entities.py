from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .value_objects import StatusLike, TodoStatus, TodoStatusType, TodoTitle


class _Unset:
    """Marker type for "field not provided" in partial updates."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()
"""Sentinel distinguishing an omitted field from an explicit None."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


# PUBLIC_INTERFACE
class Todo:
    """
    Todo aggregate root.

    Instances are built through two constructors:
    - `Todo.create`: validates user input, starts PENDING, stamps both timestamps.
    - `Todo.reconstruct`: rehydrates a stored row without validation. Only the
      persistence mapping should call it.

    State only changes through the behaviour methods below. A method whose
    effective result equals the current state is a no-op and leaves
    `updated_at` untouched.
    """

    def __init__(
        self,
        id: Optional[int],
        title: TodoTitle,
        description: Optional[str],
        status: TodoStatus,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        self._id = id
        self._title = title
        self._description = description
        self._status = status
        self._created_at = created_at
        self._updated_at = updated_at

    @classmethod
    def create(cls, title: Optional[str], description: Optional[str] = None) -> "Todo":
        title_vo = TodoTitle.create(title)
        now = _now()
        return cls(
            id=None,
            title=title_vo,
            description=_normalize_description(description),
            status=TodoStatus.default(),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        id: int,
        title: str,
        description: Optional[str],
        status: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Todo":
        return cls(
            id=id,
            title=TodoTitle.reconstruct(title),
            description=description,
            status=TodoStatus.from_string(status),
            created_at=created_at,
            updated_at=updated_at,
        )

    # Read-only accessors

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def title(self) -> str:
        return self._title.value

    @property
    def title_vo(self) -> TodoTitle:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def status(self) -> TodoStatusType:
        return self._status.value

    @property
    def status_vo(self) -> TodoStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # Behaviour

    def _touch(self) -> None:
        now = _now()
        if self._created_at.tzinfo is None:
            now = now.replace(tzinfo=None)
        self._updated_at = max(now, self._created_at)

    def complete(self) -> None:
        if self._status.is_completed():
            return
        self._status = self._status.transition_to(TodoStatusType.COMPLETED)
        self._touch()

    def uncomplete(self) -> None:
        if self._status.is_pending():
            return
        self._status = self._status.transition_to(TodoStatusType.PENDING)
        self._touch()

    def toggle_complete(self) -> None:
        if self._status.is_completed():
            self.uncomplete()
        else:
            self.complete()

    def change_status(self, new_status: StatusLike) -> None:
        target = TodoStatus.create(new_status)
        if target == self._status:
            return
        self._status = self._status.transition_to(target.value)
        self._touch()

    def update_title(self, new_title: Optional[str]) -> None:
        title_vo = TodoTitle.create(new_title)
        if title_vo == self._title:
            return
        self._title = title_vo
        self._touch()

    def update_description(self, new_description: Optional[str]) -> None:
        normalized = _normalize_description(new_description)
        if normalized == self._description:
            return
        self._description = normalized
        self._touch()

    def update(
        self,
        title: Union[str, None, _Unset] = UNSET,
        description: Union[str, None, _Unset] = UNSET,
        status: Union[StatusLike, _Unset] = UNSET,
    ) -> None:
        """
        Apply a partial update.

        Only fields that are explicitly passed are touched; `description=None`
        clears the description. Every supplied field is validated before any of
        them is applied, so a rejected title or status leaves the todo unchanged.
        """
        new_title = self._title
        if title is not UNSET:
            new_title = TodoTitle.create(title)

        new_status = self._status
        if status is not UNSET:
            target = TodoStatus.create(status)
            if target != self._status:
                new_status = self._status.transition_to(target.value)

        new_description = self._description
        if description is not UNSET:
            new_description = _normalize_description(description)

        changed = (
            new_title != self._title
            or new_description != self._description
            or new_status != self._status
        )
        if not changed:
            return
        self._title = new_title
        self._description = new_description
        self._status = new_status
        self._touch()

    # Queries

    def is_completed(self) -> bool:
        return self._status.is_completed()

    def is_new(self) -> bool:
        return self._id is None

    def can_transition_to(self, target: StatusLike) -> bool:
        return self._status.can_transition_to(target)

    def get_available_transitions(self) -> List[TodoStatusType]:
        return self._status.get_available_transitions()

    def to_snapshot(self) -> Dict[str, Any]:
        """Return a plain dict view for the presentation layer."""
        return {
            "id": self._id,
            "title": self.title,
            "description": self._description,
            "status": self.status.value,
            "is_completed": self.is_completed(),
            "available_transitions": [s.value for s in self.get_available_transitions()],
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def equals(self, other: object) -> bool:
        if not isinstance(other, Todo):
            return False
        if self._id is None and other._id is None:
            return self is other
        return self._id == other._id

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        if self._id is None:
            return id(self)
        return hash(("Todo", self._id))

    def __repr__(self) -> str:
        return f"Todo(id={self._id!r}, title={self.title!r}, status={self.status.value!r})"
