from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from ..logs import list_history
from ..services.validation import parse_id

router = APIRouter()


@router.get("/api/history")
def api_history(
    action: str | None = None,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
):
    total, items = list_history(None, action, page, size)
    return {"total": total, "items": items}


@router.get("/api/lists/{list_id}/history")
def api_list_history(
    list_id: str,
    action: str | None = None,
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
):
    # deleted lists keep their history, so no existence check against lists
    lid = parse_id(list_id)
    if lid is None:
        raise HTTPException(status_code=404, detail="list_not_found")
    total, items = list_history(lid, action, page, size)
    return {"total": total, "items": items}
