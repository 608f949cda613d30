from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request, Response

from ..logs import LogContext
from ..services.list_svc import ListStorage, find_todo, get_storage, load_list
from ..services.validation import error_for_todo, parse_id
from ..web import flash, is_xhr, redirect, render

router = APIRouter()


@router.post("/lists/{list_id}/todos")
def todo_create(
    request: Request,
    list_id: str,
    todo: str = Form(""),
    storage: ListStorage = Depends(get_storage),
):
    todo_list = load_list(storage, list_id)
    lid = todo_list["id"]
    text = todo.strip()
    log = LogContext("CREATE_TODO", list_id=lid)
    log.set_after({"name": text, "completed": False})

    error = error_for_todo(text)
    if error:
        log.write("ERROR", error)
        flash(request, "error", error)
        return render(request, "list.html", {"todo_list": todo_list, "todo": text}, status_code=422)

    storage.create_todo(lid, text)
    log.write("OK")
    flash(request, "success", "The todo was added.")
    return redirect(f"/lists/{lid}")


@router.post("/lists/{list_id}/todos/{todo_id}")
def todo_update(
    request: Request,
    list_id: str,
    todo_id: str,
    completed: str = Form(""),
    storage: ListStorage = Depends(get_storage),
):
    todo_list = load_list(storage, list_id)
    lid = todo_list["id"]
    tid = parse_id(todo_id)
    is_completed = completed == "true"
    before = find_todo(todo_list, tid)
    log = LogContext("UPDATE_TODO", list_id=lid, todo_id=tid)
    log.set_before(before)
    # an unknown todo id matches no row; the update is a no-op either way
    if before is not None:
        storage.update_todo_status(lid, tid, is_completed)
        log.set_after({**before, "completed": is_completed})
    log.write("OK")

    flash(request, "success", "The todo has been updated.")
    return redirect(f"/lists/{lid}")


@router.post("/lists/{list_id}/todos/{todo_id}/delete")
def todo_delete(
    request: Request,
    list_id: str,
    todo_id: str,
    storage: ListStorage = Depends(get_storage),
):
    todo_list = load_list(storage, list_id)
    lid = todo_list["id"]
    tid = parse_id(todo_id)
    before = find_todo(todo_list, tid)
    log = LogContext("DELETE_TODO", list_id=lid, todo_id=tid)
    log.set_before(before)
    if before is not None:
        storage.delete_todo(lid, tid)
    log.write("OK")

    if is_xhr(request):
        return Response(status_code=204)
    flash(request, "success", "The todo was deleted.")
    return redirect(f"/lists/{lid}")
