from __future__ import annotations

from typing import Any, Dict

from ..domain import PaginatedResult, Todo
from .schemas import TodoOut


# PUBLIC_INTERFACE
def pagination_envelope(result: PaginatedResult[Todo]) -> Dict[str, Any]:
    """
    Build the standard pagination envelope for list endpoints.

    Args:
        result: One page of todos as returned by the repository.

    Returns:
        Dict with keys: data (serialized todos) and meta (total, page, limit, total_pages).
    """
    return {
        "data": [TodoOut.from_entity(todo) for todo in result.data],
        "meta": {
            "total": int(result.total),
            "page": int(result.page),
            "limit": int(result.limit),
            "total_pages": int(result.total_pages),
        },
    }
