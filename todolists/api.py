"""
FastAPI app entry point aggregating the HTML routers under todolists/routes.
Keep as `uvicorn todolists.api:app`.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from .config import get_setting
from .db import ensure_schema
from .logs import ensure_log_schema
from .services.validation import ListNotFoundError
from .web import flash, redirect


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_schema()
    ensure_log_schema()
    yield


app = FastAPI(title="todolists", version="0.1.0", lifespan=lifespan)

app.add_middleware(SessionMiddleware, secret_key=get_setting("session_secret"))


@app.exception_handler(ListNotFoundError)
async def list_not_found_handler(request: Request, exc: ListNotFoundError):
    flash(request, "error", "The specified list was not found.")
    return redirect("/lists")


# Include routers
from .routes import base as base_routes
from .routes import lists as lists_routes
from .routes import todos as todos_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(lists_routes.router)
app.include_router(todos_routes.router)
app.include_router(logs_routes.router)
