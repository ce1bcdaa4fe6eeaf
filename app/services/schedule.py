"""Date-range filtering and task ordering for the project list.

Both helpers are pure: they only read ``start_date``/``end_date``/``name``
attributes, so they work equally on ORM rows and plain objects.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, TypeVar

T = TypeVar("T")


def as_date(value: Any) -> date | None:
    """Reduce datetimes to their calendar date; leave dates and ``None`` alone."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def parse_date(value: Any) -> date | None:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a ``date``.

    Empty values give ``None``; anything unparsable raises ``ValueError``.
    """

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return as_date(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValueError(f"invalid date: {text!r}") from exc


def contains_date(start: Any, end: Any, selected: Any) -> bool:
    """True when ``selected`` lies inside the inclusive ``[start, end]`` range."""

    start_day = as_date(start)
    end_day = as_date(end)
    selected_day = as_date(selected)
    if start_day is None or end_day is None or selected_day is None:
        return False
    return start_day <= selected_day <= end_day


def projects_on_date(selected_date: Any, projects: Iterable[T]) -> list[T]:
    """Return the projects whose date range contains ``selected_date``.

    Projects missing either bound never match. Input order is preserved.
    """

    return [
        project
        for project in projects
        if contains_date(
            getattr(project, "start_date", None),
            getattr(project, "end_date", None),
            selected_date,
        )
    ]


def sorted_tasks(tasks: Iterable[T] | None) -> list[T]:
    """Order tasks by name, case-sensitively, with a missing name as ``""``.

    ``sorted`` is stable, so tasks with equal names keep their input order.
    """

    return sorted(tasks or (), key=lambda task: getattr(task, "name", None) or "")


def validate_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must be on or after start_date")


__all__ = [
    "as_date",
    "contains_date",
    "parse_date",
    "projects_on_date",
    "sorted_tasks",
    "validate_range",
]
