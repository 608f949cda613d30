"""
Shared HTML rendering: Jinja2 templates and session flash messages.
"""
from __future__ import annotations

import os
from typing import Any

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from .services import view_helpers

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)
view_helpers.register(templates.env)

FLASH_KINDS = ("error", "success")


def flash(request: Request, kind: str, message: str) -> None:
    request.session[kind] = message


def pop_flashes(request: Request) -> dict[str, str | None]:
    return {k: request.session.pop(k, None) for k in FLASH_KINDS}


def render(request: Request, name: str, context: dict[str, Any] | None = None, status_code: int = 200):
    ctx = dict(context or {})
    ctx["flashes"] = pop_flashes(request)
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


def is_xhr(request: Request) -> bool:
    return request.headers.get("x-requested-with") == "XMLHttpRequest"
