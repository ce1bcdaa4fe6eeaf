"""Shared Jinja2 environment with the formatting filters the pages use."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from fastapi.templating import Jinja2Templates

from .config import settings
from .status import STATUS_CHOICES, TaskStatus

_LOCAL_TZ = ZoneInfo(settings.TZ) if settings.TZ else None


def today() -> date:
    """Current calendar date in the configured timezone."""

    return datetime.now(_LOCAL_TZ).date()


def _fmt_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    return ""


def _fmt_long_date(value: Any) -> str:
    # e.g. "Friday, March 1, 2024"
    if not isinstance(value, (date, datetime)):
        return ""
    return f"{value.strftime('%A, %B')} {value.day}, {value.year}"


def _status_label(value: Any) -> str:
    return TaskStatus.from_stored(value).label


def _status_color(value: Any) -> str:
    return TaskStatus.from_stored(value).color


def get_templates() -> Jinja2Templates:
    """Create a ``Jinja2Templates`` instance with our standard filters registered."""

    templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))
    env = templates.env
    env.filters["fmt_date"] = _fmt_date
    env.filters["fmt_long_date"] = _fmt_long_date
    env.filters["status_label"] = _status_label
    env.filters["status_color"] = _status_color
    env.globals["STATUS_CHOICES"] = STATUS_CHOICES
    env.globals["APP_NAME"] = settings.APP_NAME
    return templates
