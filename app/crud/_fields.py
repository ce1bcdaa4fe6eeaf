"""Payload coercion shared by the project and task CRUD helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..core.status import normalize_status
from ..services.schedule import parse_date, validate_range


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def clean_name(value: Any) -> str | None:
    name = "" if value is None else str(value).strip()
    return name or None


def apply_fields(record: Any, payload: dict) -> None:
    """Copy name/date/status keys present in ``payload`` onto ``record``.

    Only keys present in the payload are touched. A changed date range is
    checked before anything is written; rows already stored with an inverted
    range can still have their name or status edited.
    """

    start = parse_date(payload["start_date"]) if "start_date" in payload else record.start_date
    end = parse_date(payload["end_date"]) if "end_date" in payload else record.end_date
    if (start, end) != (record.start_date, record.end_date):
        validate_range(start, end)

    if "name" in payload:
        record.name = clean_name(payload.get("name"))
    record.start_date = start
    record.end_date = end
    if "status" in payload:
        record.status = normalize_status(payload.get("status"))
