from __future__ import annotations

from sqlite3 import Connection

from ..db import execute, query

# completed 列用单字符存储
TRUE_FLAG = "t"
FALSE_FLAG = "f"


def encode_completed(value: bool) -> str:
    return TRUE_FLAG if value else FALSE_FLAG


def decode_completed(value) -> bool:
    return value == TRUE_FLAG


def list_for_list(conn: Connection, list_id: int):
    return query(
        conn,
        "SELECT id, name, completed FROM todos WHERE list_id=? ORDER BY id",
        list_id,
    )


def insert_todo(conn: Connection, list_id: int, name: str) -> int:
    return execute(
        conn,
        "INSERT INTO todos(name, list_id, completed) VALUES(?, ?, ?)",
        name, list_id, FALSE_FLAG,
    ).rowcount


def update_status(conn: Connection, list_id: int, todo_id: int, completed: bool) -> int:
    return execute(
        conn,
        "UPDATE todos SET completed=? WHERE list_id=? AND id=?",
        encode_completed(completed), list_id, todo_id,
    ).rowcount


def complete_all(conn: Connection, list_id: int) -> int:
    return execute(
        conn,
        "UPDATE todos SET completed=? WHERE list_id=?",
        TRUE_FLAG, list_id,
    ).rowcount


def delete_todo(conn: Connection, list_id: int, todo_id: int) -> int:
    return execute(conn, "DELETE FROM todos WHERE list_id=? AND id=?", list_id, todo_id).rowcount


def delete_for_list(conn: Connection, list_id: int) -> int:
    return execute(conn, "DELETE FROM todos WHERE list_id=?", list_id).rowcount
