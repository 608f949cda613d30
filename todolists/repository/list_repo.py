from __future__ import annotations

from sqlite3 import Connection

from ..db import execute, query


def get_one(conn: Connection, list_id: int):
    rows = query(conn, "SELECT id, name FROM lists WHERE id=?", list_id)
    return rows[0] if rows else None


def list_all(conn: Connection):
    return query(conn, "SELECT id, name FROM lists ORDER BY id")


def insert_list(conn: Connection, name: str) -> int:
    return execute(conn, "INSERT INTO lists(name) VALUES(?)", name).rowcount


def update_name(conn: Connection, list_id: int, name: str) -> int:
    return execute(conn, "UPDATE lists SET name=? WHERE id=?", name, list_id).rowcount


def delete_list(conn: Connection, list_id: int) -> int:
    return execute(conn, "DELETE FROM lists WHERE id=?", list_id).rowcount
