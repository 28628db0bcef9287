"""Task list order, shared by the SQL query and the client-side list.

Incomplete tasks first, then status in declaration order, then newest first.
"""

from datetime import datetime
from typing import Any, Callable, Iterable, List

from taskpad.models.enums import STATUS_RANK


def _attr_getter(name: str) -> Callable[[Any], Any]:
    def get(task):
        if isinstance(task, dict):
            return task.get(name)
        return getattr(task, name)
    return get


def _as_datetime(value) -> datetime:
    if value is None:
        return datetime.min
    if isinstance(value, str):
        return datetime.fromisoformat(value).replace(tzinfo=None)
    return value.replace(tzinfo=None)


def sort_tasks(
    tasks: Iterable[Any],
    completed_key: str = "completed",
    status_key: str = "status",
    created_key: str = "created_at",
) -> List[Any]:
    """Works on ORM objects or on JSON dicts (pass the camelCase key names).

    Two stable passes, so tasks equal on every key keep their input order.
    """
    get_completed = _attr_getter(completed_key)
    get_status = _attr_getter(status_key)
    get_created = _attr_getter(created_key)

    result = sorted(tasks, key=lambda t: _as_datetime(get_created(t)), reverse=True)
    result.sort(key=lambda t: (
        bool(get_completed(t)),
        STATUS_RANK.get(get_status(t), len(STATUS_RANK)),
    ))
    return result
