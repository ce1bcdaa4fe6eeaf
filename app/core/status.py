"""Schedule status shared by projects and tasks.

Statuses are persisted as the small integer codes 0/1/2, so the enum values
must never change. Anything else found in storage reads back as ``ON_TIME``.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any

_CODE_RE = re.compile(r"-?[0-9]{1,6}")


class TaskStatus(IntEnum):
    ON_TIME = 0
    RUNNING_BEHIND = 1
    COMPLETED = 2

    @property
    def label(self) -> str:
        return _DISPLAY[self][0]

    @property
    def color(self) -> str:
        return _DISPLAY[self][1]

    @classmethod
    def from_stored(cls, value: Any) -> "TaskStatus":
        """Map a stored code onto a status, falling back to ``ON_TIME``."""

        # Only exact integers count; floats, bools and junk read as on-time.
        if isinstance(value, str) and _CODE_RE.fullmatch(value.strip()):
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int):
            return cls.ON_TIME
        try:
            return cls(value)
        except ValueError:
            return cls.ON_TIME


# variant -> (label, color)
_DISPLAY: dict[TaskStatus, tuple[str, str]] = {
    TaskStatus.ON_TIME: ("On Time", "yellow"),
    TaskStatus.RUNNING_BEHIND: ("Running Behind", "red"),
    TaskStatus.COMPLETED: ("Completed", "green"),
}

STATUS_CHOICES: tuple[TaskStatus, ...] = tuple(TaskStatus)


def label(status: Any) -> str:
    return TaskStatus.from_stored(status).label


def color(status: Any) -> str:
    return TaskStatus.from_stored(status).color


def normalize_status(value: Any) -> int:
    """Return the integer code to persist for ``value``."""

    return int(TaskStatus.from_stored(value))


__all__ = [
    "STATUS_CHOICES",
    "TaskStatus",
    "color",
    "label",
    "normalize_status",
]
