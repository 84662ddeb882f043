from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generator, List, Optional, Tuple

from ..domain import (
    PaginatedResult,
    PaginationOptions,
    Todo,
    TodoFilterOptions,
    TodoNotFoundError,
    TodoRepository,
    TodoStatusType,
)
from ..domain.repositories import total_pages
from .models import TodoRecord, to_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    status: str = "status"
    created_at: str = "created_at"
    updated_at: str = "updated_at"


_COLS = _Cols()


def _parse_dt(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_dt(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class SQLiteTodoRepository(TodoRepository):
    """
    Lightweight SQLite repository implementing the TodoRepository contract.

    A new connection is opened per operation, so instances can be shared
    across request threads.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.description} TEXT NULL,
                    {_COLS.status} TEXT NOT NULL DEFAULT 'PENDING',
                    {_COLS.created_at} TEXT NOT NULL,
                    {_COLS.updated_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_status ON {_COLS.table}({_COLS.status})"
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )

    def _row_to_entity(self, row: sqlite3.Row) -> Todo:
        record: TodoRecord = {
            "id": int(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "description": row[_COLS.description],
            "status": str(row[_COLS.status]),
            "created_at": _parse_dt(row[_COLS.created_at]),
            "updated_at": _parse_dt(row[_COLS.updated_at]),
        }
        return to_domain(record)

    def _where(self, filter: Optional[TodoFilterOptions]) -> Tuple[str, list]:
        clauses = []
        params: list = []
        if filter is not None:
            if filter.status is not None:
                clauses.append(f"{_COLS.status} = ?")
                params.append(TodoStatusType(filter.status).value)
            if filter.title_search:
                clauses.append(f"instr(lower({_COLS.title}), ?) > 0")
                params.append(filter.title_search.lower())
        where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where_sql, params

    def _fetch_one(self, conn: sqlite3.Connection, todo_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
        ).fetchone()

    def find_all(
        self,
        pagination: Optional[PaginationOptions] = None,
        filter: Optional[TodoFilterOptions] = None,
    ) -> PaginatedResult[Todo]:
        page, limit = (pagination or PaginationOptions()).resolve()
        where_sql, params = self._where(filter)
        offset = (page - 1) * limit

        with self._conn() as conn:
            count_row = conn.execute(
                f"SELECT COUNT(*) as cnt FROM {_COLS.table} {where_sql}", params
            ).fetchone()
            total = int(count_row["cnt"]) if count_row else 0

            rows = conn.execute(
                f"""
                SELECT * FROM {_COLS.table}
                {where_sql}
                ORDER BY {_COLS.created_at} DESC, {_COLS.id} DESC
                LIMIT ? OFFSET ?
                """,
                [*params, limit, offset],
            ).fetchall()

        return PaginatedResult(
            data=[self._row_to_entity(r) for r in rows],
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
        )

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._conn() as conn:
            row = self._fetch_one(conn, todo_id)
            return self._row_to_entity(row) if row else None

    def find_by_status(self, status: TodoStatusType) -> List[Todo]:
        where_sql, params = self._where(TodoFilterOptions(status=status))
        with self._conn() as conn:
            rows = conn.execute(
                f"""
                SELECT * FROM {_COLS.table}
                {where_sql}
                ORDER BY {_COLS.created_at} DESC, {_COLS.id} DESC
                """,
                params,
            ).fetchall()
        return [self._row_to_entity(r) for r in rows]

    def save(self, todo: Todo) -> Todo:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.description}, {_COLS.status},
                    {_COLS.created_at}, {_COLS.updated_at})
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    todo.title,
                    todo.description,
                    todo.status.value,
                    _format_dt(todo.created_at),
                    _format_dt(todo.updated_at),
                ),
            )
            new_id = cur.lastrowid
            row = self._fetch_one(conn, new_id)
            assert row is not None
        logger.debug("Inserted todo id=%s", new_id)
        return self._row_to_entity(row)

    def update(self, todo: Todo) -> Todo:
        if todo.id is None:
            raise ValueError("Cannot update a todo that has not been saved")
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.title} = ?, {_COLS.description} = ?, {_COLS.status} = ?,
                    {_COLS.updated_at} = ?
                WHERE {_COLS.id} = ?
                """,
                (
                    todo.title,
                    todo.description,
                    todo.status.value,
                    _format_dt(todo.updated_at),
                    todo.id,
                ),
            )
            if cur.rowcount == 0:
                raise TodoNotFoundError(todo.id)
            row = self._fetch_one(conn, todo.id)
            assert row is not None
        return self._row_to_entity(row)

    def delete(self, todo_id: int) -> None:
        with self._conn() as conn:
            conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))

    def count(self, filter: Optional[TodoFilterOptions] = None) -> int:
        where_sql, params = self._where(filter)
        with self._conn() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) as cnt FROM {_COLS.table} {where_sql}", params
            ).fetchone()
        return int(row["cnt"]) if row else 0
