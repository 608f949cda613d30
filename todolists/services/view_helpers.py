from __future__ import annotations

from typing import Any, Iterable


def todos_count(lst: dict[str, Any]) -> int:
    return len(lst["todos"])


def todos_remaining_count(lst: dict[str, Any]) -> int:
    return sum(1 for t in lst["todos"] if not t["completed"])


def list_complete(lst: dict[str, Any]) -> bool:
    return todos_count(lst) > 0 and todos_remaining_count(lst) == 0


def list_class(lst: dict[str, Any]) -> str | None:
    return "complete" if list_complete(lst) else None


def sort_lists(lists: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Incomplete lists first, then complete ones; order within each group kept."""
    lists = list(lists)
    incomplete = [lst for lst in lists if not list_complete(lst)]
    complete = [lst for lst in lists if list_complete(lst)]
    return incomplete + complete


def sort_todos(todos: Iterable[dict[str, Any]]) -> list[tuple[dict[str, Any], int]]:
    """
    (todo, index) pairs, incomplete first. ``index`` is the position in the
    original sequence, so templates can still address the todo by it.
    """
    indexed = list(enumerate(todos))
    incomplete = [(t, i) for i, t in indexed if not t["completed"]]
    complete = [(t, i) for i, t in indexed if t["completed"]]
    return incomplete + complete


def register(env) -> None:
    """Expose the helpers to a Jinja2 environment."""
    env.filters["list_class"] = list_class
    env.filters["sort_lists"] = sort_lists
    env.filters["sort_todos"] = sort_todos
    env.globals["list_complete"] = list_complete
    env.globals["todos_count"] = todos_count
    env.globals["todos_remaining_count"] = todos_remaining_count
