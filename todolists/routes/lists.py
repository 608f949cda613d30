from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from ..logs import LogContext
from ..services.list_svc import ListStorage, get_storage, load_list, require_list_id
from ..services.validation import error_for_list_name
from ..services.view_helpers import todos_remaining_count
from ..web import flash, is_xhr, redirect, render

router = APIRouter()

# list ids arrive as raw path strings; load_list/require_list_id turn
# anything unparsable into the not-found redirect


@router.get("/lists", response_class=HTMLResponse)
def list_index(request: Request, storage: ListStorage = Depends(get_storage)):
    return render(request, "lists.html", {"lists": storage.all_lists()})


# /lists/new 必须在 /lists/{list_id} 之前注册
@router.get("/lists/new", response_class=HTMLResponse)
def list_new_form(request: Request):
    return render(request, "new_list.html", {"list_name": ""})


@router.get("/lists/{list_id}", response_class=HTMLResponse)
def list_show(request: Request, list_id: str, storage: ListStorage = Depends(get_storage)):
    todo_list = load_list(storage, list_id)
    return render(request, "list.html", {"todo_list": todo_list})


@router.get("/lists/{list_id}/edit", response_class=HTMLResponse)
def list_edit_form(request: Request, list_id: str, storage: ListStorage = Depends(get_storage)):
    todo_list = load_list(storage, list_id)
    return render(request, "edit_list.html", {"todo_list": todo_list, "list_name": todo_list["name"]})


@router.post("/lists")
def list_create(
    request: Request,
    list_name: str = Form(""),
    storage: ListStorage = Depends(get_storage),
):
    name = list_name.strip()
    log = LogContext("CREATE_LIST")
    log.set_after({"name": name})

    error = error_for_list_name(name, storage.all_lists())
    if error is None:
        try:
            storage.create_list(name)
        except ValueError as ve:
            error = str(ve)

    if error:
        log.write("ERROR", error)
        flash(request, "error", error)
        return render(request, "new_list.html", {"list_name": name}, status_code=422)

    log.write("OK")
    flash(request, "success", "The list has been created.")
    return redirect("/lists")


@router.post("/lists/{list_id}")
def list_update(
    request: Request,
    list_id: str,
    list_name: str = Form(""),
    storage: ListStorage = Depends(get_storage),
):
    todo_list = load_list(storage, list_id)
    lid = todo_list["id"]
    name = list_name.strip()
    log = LogContext("RENAME_LIST", list_id=lid)
    log.set_before({"name": todo_list["name"]})
    log.set_after({"name": name})

    error = error_for_list_name(name, storage.all_lists())
    if error is None:
        try:
            storage.update_list_name(lid, name)
        except ValueError as ve:
            error = str(ve)

    if error:
        log.write("ERROR", error)
        flash(request, "error", error)
        return render(
            request,
            "edit_list.html",
            {"todo_list": todo_list, "list_name": name},
            status_code=422,
        )

    log.write("OK")
    flash(request, "success", "The list has been updated.")
    return redirect(f"/lists/{lid}")


@router.post("/lists/{list_id}/delete")
def list_delete(request: Request, list_id: str, storage: ListStorage = Depends(get_storage)):
    lid = require_list_id(list_id)
    log = LogContext("DELETE_LIST", list_id=lid)
    log.set_before(storage.find_list(lid))
    storage.delete_list(lid)
    log.write("OK")

    if is_xhr(request):
        return PlainTextResponse("/lists")
    flash(request, "success", "The list has been deleted.")
    return redirect("/lists")


@router.post("/lists/{list_id}/complete_all")
def list_complete_all(request: Request, list_id: str, storage: ListStorage = Depends(get_storage)):
    todo_list = load_list(storage, list_id)
    lid = todo_list["id"]
    log = LogContext("COMPLETE_ALL_TODOS", list_id=lid)
    log.set_before({"remaining": todos_remaining_count(todo_list)})
    storage.mark_all_complete(lid)
    log.set_after({"remaining": 0})
    log.write("OK")

    flash(request, "success", "All todos have been completed.")
    return redirect(f"/lists/{lid}")
