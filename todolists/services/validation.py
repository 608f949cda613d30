from __future__ import annotations

from typing import Any, Iterable

NAME_MIN = 1
NAME_MAX = 100
SQLITE_MAX_INT = 2**63 - 1

LIST_NAME_TAKEN = "List name must be unique."
LIST_NAME_LENGTH = "List name must be between 1 and 100 characters."
TODO_NAME_LENGTH = "Todo name must be between 1 and 100 characters."


class ListNameTakenError(ValueError):
    def __init__(self, msg: str = LIST_NAME_TAKEN):
        super().__init__(msg)


class ListNotFoundError(LookupError):
    def __init__(self, list_id):
        super().__init__(f"list_not_found: {list_id}")
        self.list_id = list_id


def parse_id(raw: str) -> int | None:
    """Path segment -> row id; None for anything SQLite could not hold as an id."""
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    if value > SQLITE_MAX_INT:
        return None
    return value


def _length_ok(name: str) -> bool:
    return NAME_MIN <= len(name) <= NAME_MAX


def error_for_list_name(name: str, lists: Iterable[dict[str, Any]]) -> str | None:
    """Return an error message if the name is invalid, None if it is valid."""
    if any(lst["name"] == name for lst in lists):
        return LIST_NAME_TAKEN
    if not _length_ok(name):
        return LIST_NAME_LENGTH
    return None


def error_for_todo(name: str) -> str | None:
    if not _length_ok(name):
        return TODO_NAME_LENGTH
    return None
