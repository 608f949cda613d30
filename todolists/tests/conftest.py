import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "todos_test.db"
    # Point the app to this temp DB for the session only
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("APP_ENV", "test")
        mp.setenv("TODOS_DB_PATH", str(path))
        from todolists.db import ensure_schema
        from todolists.logs import ensure_log_schema
        ensure_schema(str(path))
        ensure_log_schema()
        yield str(path)


@pytest.fixture()
def client(tmp_db_path):
    from todolists.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture()
def storage(tmp_db_path):
    from todolists.db import get_conn
    from todolists.services.list_svc import ListStorage
    with get_conn() as conn:
        yield ListStorage(conn)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("TODOS_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("todos", "lists", "operation_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield
