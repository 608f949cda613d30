"""
Operation log: one row per list/todo mutation, with the list and todo it
touched and snapshots of the affected row before and after.
"""
from __future__ import annotations

import json
import time
import uuid
import datetime as dt
from typing import Any, Optional

from .db import get_conn

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  action TEXT NOT NULL,
  list_id INTEGER,
  todo_id INTEGER,
  request_id TEXT,
  before_json TEXT,
  after_json TEXT,
  result TEXT NOT NULL,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_list ON operation_log(list_id, id);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
"""

_JSON_COLUMNS = ("before_json", "after_json")


def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)


def _dump(obj: Any) -> Optional[str]:
    return None if obj is None else json.dumps(obj, ensure_ascii=False)


class LogContext:
    """
    Collects what a handler changed and writes it once the outcome is known.

    ``before`` / ``after`` hold the list or todo as the handler saw it, e.g.
    ``{"name": "Old"}`` -> ``{"name": "New"}`` for a rename, or the todo dict
    with its ``completed`` flag for a toggle.
    """

    def __init__(self, action: str, list_id: int | None = None, todo_id: int | None = None):
        self.action = action
        self.list_id = list_id
        self.todo_id = todo_id
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.before = None
        self.after = None

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj

    def write(self, result: str = "OK", err: Optional[str] = None):
        rec = {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "action": self.action,
            "list_id": self.list_id,
            "todo_id": self.todo_id,
            "request_id": self.request_id,
            "before_json": _dump(self.before),
            "after_json": _dump(self.after),
            "result": result,
            "err_msg": err,
            "latency_ms": int((time.perf_counter() - self.start) * 1000),
        }
        with get_conn() as conn:
            conn.execute(
                "INSERT INTO operation_log"
                "(ts,action,list_id,todo_id,request_id,before_json,after_json,result,err_msg,latency_ms) "
                "VALUES(:ts,:action,:list_id,:todo_id,:request_id,:before_json,:after_json,:result,:err_msg,:latency_ms)",
                rec,
            )


def _decode(row) -> dict[str, Any]:
    item = dict(row)
    for col in _JSON_COLUMNS:
        raw = item.pop(col)
        item[col[: -len("_json")]] = None if raw is None else json.loads(raw)
    return item


def list_history(list_id: int | None, action: str | None, page: int, size: int) -> tuple[int, list[dict[str, Any]]]:
    """Newest first; ``list_id`` narrows to one list, including its todos' entries."""
    where = []
    params: dict[str, Any] = {}
    if list_id is not None:
        where.append("list_id = :list_id")
        params["list_id"] = list_id
    if action:
        where.append("action = :action")
        params["action"] = action
    wh = " WHERE " + " AND ".join(where) if where else ""
    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{wh}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM operation_log{wh} ORDER BY id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (page - 1) * size},
        ).fetchall()
    return total, [_decode(r) for r in rows]
