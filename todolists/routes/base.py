from fastapi import APIRouter

from ..web import redirect

router = APIRouter()

@router.get("/")
def index():
    return redirect("/lists")

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/version")
def version():
    return {"app": "todolists", "version": "0.1.0"}
