from __future__ import annotations

import sqlite3
from typing import Any, Iterator

from ..db import get_conn, transaction
from ..repository import list_repo, todo_repo
from .validation import ListNameTakenError, ListNotFoundError, parse_id


class ListStorage:
    """
    Lists and their todos over a single connection.

    One instance per request; the connection is owned by whoever built it
    (see ``get_storage``). Read operations return plain dicts:
    ``{"id", "name", "todos": [{"id", "name", "completed"}]}``.
    Write operations return the driver row count.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def find_list(self, list_id: int) -> dict[str, Any] | None:
        row = list_repo.get_one(self.conn, list_id)
        if row is None:
            return None
        lid = int(row["id"])
        return {"id": lid, "name": row["name"], "todos": self._todos_for(lid)}

    def all_lists(self) -> list[dict[str, Any]]:
        out = []
        for row in list_repo.list_all(self.conn):
            lid = int(row["id"])
            out.append({"id": lid, "name": row["name"], "todos": self._todos_for(lid)})
        return out

    def create_list(self, name: str) -> int:
        try:
            return list_repo.insert_list(self.conn, name)
        except sqlite3.IntegrityError as e:
            raise ListNameTakenError() from e

    def update_list_name(self, list_id: int, new_name: str) -> int:
        try:
            return list_repo.update_name(self.conn, list_id, new_name)
        except sqlite3.IntegrityError as e:
            raise ListNameTakenError() from e

    def delete_list(self, list_id: int) -> int:
        # todos 先删，list 后删，同一事务
        with transaction(self.conn):
            todo_repo.delete_for_list(self.conn, list_id)
            return list_repo.delete_list(self.conn, list_id)

    def create_todo(self, list_id: int, name: str) -> int:
        return todo_repo.insert_todo(self.conn, list_id, name)

    def update_todo_status(self, list_id: int, todo_id: int, new_status: bool) -> int:
        return todo_repo.update_status(self.conn, list_id, todo_id, new_status)

    def delete_todo(self, list_id: int, todo_id: int) -> int:
        return todo_repo.delete_todo(self.conn, list_id, todo_id)

    def mark_all_complete(self, list_id: int) -> int:
        return todo_repo.complete_all(self.conn, list_id)

    def _todos_for(self, list_id: int) -> list[dict[str, Any]]:
        return [
            {
                "id": int(r["id"]),
                "name": r["name"],
                "completed": todo_repo.decode_completed(r["completed"]),
            }
            for r in todo_repo.list_for_list(self.conn, list_id)
        ]


def require_list_id(raw: str) -> int:
    list_id = parse_id(raw)
    if list_id is None:
        raise ListNotFoundError(raw)
    return list_id


def load_list(storage: ListStorage, raw_id: str) -> dict[str, Any]:
    lst = storage.find_list(require_list_id(raw_id))
    if lst is None:
        raise ListNotFoundError(raw_id)
    return lst


def find_todo(todo_list: dict[str, Any], todo_id: int | None) -> dict[str, Any] | None:
    return next((t for t in todo_list["todos"] if t["id"] == todo_id), None)


def get_storage() -> Iterator[ListStorage]:
    """FastAPI dependency: one connection per request, closed afterwards."""
    with get_conn() as conn:
        yield ListStorage(conn)
