from __future__ import annotations

from todolists.db import get_conn
from todolists.logs import LogContext, list_history
from todolists.services.list_svc import ListStorage


def _list_id(name):
    with get_conn() as conn:
        return next(lst["id"] for lst in ListStorage(conn).all_lists() if lst["name"] == name)


def _todo_id(list_id):
    with get_conn() as conn:
        return ListStorage(conn).find_list(list_id)["todos"][0]["id"]


def test_create_list_logged_ok_and_rejected(client):
    client.post("/lists", data={"list_name": "Audit"})
    client.post("/lists", data={"list_name": "Audit"})

    total, items = list_history(None, "CREATE_LIST", 1, 20)
    assert total == 2
    rejected, created = items  # newest first
    assert created["result"] == "OK"
    assert created["after"] == {"name": "Audit"}
    assert rejected["result"] == "ERROR"
    assert rejected["err_msg"] == "List name must be unique."


def test_rename_records_old_and_new_name(client):
    client.post("/lists", data={"list_name": "Old"})
    lid = _list_id("Old")
    client.post(f"/lists/{lid}", data={"list_name": "New"})

    total, items = list_history(lid, "RENAME_LIST", 1, 20)
    assert total == 1
    entry = items[0]
    assert entry["list_id"] == lid
    assert entry["before"] == {"name": "Old"}
    assert entry["after"] == {"name": "New"}


def test_toggle_and_delete_todo_record_the_todo(client):
    client.post("/lists", data={"list_name": "Chores"})
    lid = _list_id("Chores")
    client.post(f"/lists/{lid}/todos", data={"todo": "sweep"})
    tid = _todo_id(lid)

    client.post(f"/lists/{lid}/todos/{tid}", data={"completed": "true"})
    client.post(f"/lists/{lid}/todos/{tid}/delete")

    _, toggles = list_history(lid, "UPDATE_TODO", 1, 20)
    assert toggles[0]["todo_id"] == tid
    assert toggles[0]["before"] == {"id": tid, "name": "sweep", "completed": False}
    assert toggles[0]["after"] == {"id": tid, "name": "sweep", "completed": True}

    _, deletes = list_history(lid, "DELETE_TODO", 1, 20)
    assert deletes[0]["before"] == {"id": tid, "name": "sweep", "completed": True}
    assert deletes[0]["after"] is None


def test_deleted_list_keeps_history(client):
    client.post("/lists", data={"list_name": "Gone"})
    lid = _list_id("Gone")
    client.post(f"/lists/{lid}/todos", data={"todo": "x"})
    client.post(f"/lists/{lid}/delete")

    r = client.get(f"/api/lists/{lid}/history", params={"action": "DELETE_LIST"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    before = body["items"][0]["before"]
    assert before["name"] == "Gone"
    assert [t["name"] for t in before["todos"]] == ["x"]


def test_history_api_paging_and_bad_id(client):
    for i in range(3):
        log = LogContext("COMPLETE_ALL_TODOS", list_id=7)
        log.set_before({"remaining": i})
        log.write("OK")

    r = client.get("/api/lists/7/history", params={"page": 2, "size": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert [it["before"]["remaining"] for it in body["items"]] == [0]
    assert body["items"][0]["latency_ms"] >= 0

    assert client.get("/api/history").json()["total"] == 3
    assert client.get("/api/lists/abc/history").status_code == 404
