from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import UNSET, Todo, TodoStatusType, UpdateTodoCommand

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Only the shape is checked here; whitespace-only titles are rejected by the
    domain with a 400.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        }
    )

    title: str = Field(
        ..., description="Short title for the todo item", min_length=1, max_length=TITLE_MAX_LENGTH
    )
    description: Optional[str] = Field(
        default=None, description="Optional detailed description", max_length=DESCRIPTION_MAX_LENGTH
    )


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    All fields are optional; only provided fields will be updated.
    Sending "description": null clears the description.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "description": "Milk, eggs, bread, and paper towels",
                "status": "IN_PROGRESS",
            }
        }
    )

    title: Optional[str] = Field(
        default=None, description="Short title for the todo item", min_length=1, max_length=TITLE_MAX_LENGTH
    )
    description: Optional[str] = Field(
        default=None, description="Optional detailed description", max_length=DESCRIPTION_MAX_LENGTH
    )
    status: Optional[TodoStatusType] = Field(
        default=None, description="Target status: PENDING, IN_PROGRESS or COMPLETED"
    )

    def to_command(self, todo_id: int) -> UpdateTodoCommand:
        """
        Build the domain command, keeping omitted fields UNSET.

        Explicit nulls are only meaningful for description; a null title or
        status is treated as omitted.
        """
        provided = self.model_fields_set
        return UpdateTodoCommand(
            id=todo_id,
            title=self.title if "title" in provided and self.title is not None else UNSET,
            description=self.description if "description" in provided else UNSET,
            status=self.status if "status" in provided and self.status is not None else UNSET,
        )


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "status": "PENDING",
                "is_completed": False,
                "available_transitions": ["IN_PROGRESS", "COMPLETED"],
                "created_at": "2025-01-25T10:15:30.123456+00:00",
                "updated_at": "2025-01-26T09:00:00.000001+00:00",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    status: TodoStatusType = Field(..., description="Current status")
    is_completed: bool = Field(..., description="True when status is COMPLETED")
    available_transitions: List[TodoStatusType] = Field(
        ..., description="Statuses this todo may move to next"
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoOut":
        return cls(**todo.to_snapshot())


class PaginationMeta(BaseModel):
    total: int = Field(..., description="Total number of items matching the query")
    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size applied to the query")
    total_pages: int = Field(..., description="Number of pages for the current limit")


# PUBLIC_INTERFACE
class PaginatedTodoOut(BaseModel):
    """
    Envelope for paginated list responses.
    """
    data: List[TodoOut] = Field(..., description="Todo items on this page")
    meta: PaginationMeta
