from __future__ import annotations

# todolists/db.py
import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator

from .config import is_production, project_root, read_config_yaml

logger = logging.getLogger(__name__)

# 本地开发默认库名（固定）
LOCAL_DB_NAME = "todos.db"
SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")

# DB 路径解析顺序：
# 1) production 模式：环境变量 DATABASE_URL，其次 config.yaml 的 database_url；都没有则报错
# 2) 环境变量 TODOS_DB_PATH（测试用）
# 3) config.yaml 的 db_path
# 4) 兜底：项目根 todos.db


def path_from_url(url: str) -> str:
    """Turn ``sqlite:///x.db`` / ``sqlite:////abs/x.db`` or a bare path into a file path."""
    if url.startswith("sqlite:///"):
        path = url[len("sqlite:///"):]
        if not path:
            raise ValueError(f"missing database path in url: {url}")
        return path
    if "://" in url:
        raise ValueError(f"unsupported database url: {url}")
    return url


def get_db_path() -> str:
    cfg = read_config_yaml()
    if is_production():
        url = os.environ.get("DATABASE_URL") or cfg.get("database_url")
        if not url:
            raise RuntimeError("DATABASE_URL must be set when APP_ENV=production")
        path = path_from_url(url)
    elif os.environ.get("TODOS_DB_PATH"):
        path = os.environ["TODOS_DB_PATH"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = os.path.join(project_root(), LOCAL_DB_NAME)

    # 确保目录存在
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def connect(db_path: str | None = None) -> sqlite3.Connection:
    """
    打开 SQLite 连接：autocommit（isolation_level=None），外键开启，row_factory 为 Row。
    不做连接池、重试或重连；打不开就直接抛出。
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()


def execute(conn: sqlite3.Connection, statement: str, *params: Any) -> sqlite3.Cursor:
    logger.info("%s: %s", statement, list(params))
    return conn.execute(statement, params)


def query(conn: sqlite3.Connection, statement: str, *params: Any) -> list[sqlite3.Row]:
    return execute(conn, statement, *params).fetchall()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    conn.execute("BEGIN")
    try:
        yield conn
    except Exception:
        conn.execute("ROLLBACK")
        raise
    else:
        conn.execute("COMMIT")


def ensure_schema(db_path: str | None = None):
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        ddl = f.read()
    with get_conn(db_path) as conn:
        conn.executescript(ddl)
