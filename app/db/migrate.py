"""Small additive migrations for SQLite databases created by older builds."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Engine

# Idempotent, additive only. Columns are never dropped.


def _column_names(engine: Engine, table: str) -> set[str]:
    with engine.connect() as conn:
        rows = conn.execute(text(f"PRAGMA table_info({table})")).mappings().all()
    return {row["name"] for row in rows}


def _add_column_sqlite(engine: Engine, table: str, col_def: str) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {col_def}"))


def _create_index_if_not_exists(engine: Engine, table: str, name: str, cols: Iterable[str]) -> None:
    cols_sql = ", ".join(cols)
    with engine.begin() as conn:
        conn.execute(text(f"CREATE INDEX IF NOT EXISTS {name} ON {table} ({cols_sql})"))


# Columns the models expect that a hand-made or older table may lack.
NEEDED_COLUMNS: dict[str, dict[str, str]] = {
    "projects": {
        "status": "INTEGER DEFAULT 0 NOT NULL",
        "created_at": "TEXT DEFAULT '' NOT NULL",
        "updated_at": "TEXT DEFAULT '' NOT NULL",
    },
    "tasks": {
        "status": "INTEGER DEFAULT 0 NOT NULL",
        "created_at": "TEXT DEFAULT '' NOT NULL",
        "updated_at": "TEXT DEFAULT '' NOT NULL",
    },
}

INDEXES: dict[str, tuple[str, list[str]]] = {
    "projects": ("ix_projects_start_date", ["start_date"]),
    "tasks": ("ix_tasks_project_id", ["project_id"]),
}


def run_migrations(engine: Engine) -> None:
    """Bring an existing SQLite schema up to what the models expect."""

    if engine.dialect.name != "sqlite":
        return
    for table, needed in NEEDED_COLUMNS.items():
        existing = _column_names(engine, table)
        if not existing:
            # Table absent; Base.metadata.create_all builds it fresh.
            continue
        for name, dtype in needed.items():
            if name not in existing:
                _add_column_sqlite(engine, table, f"{name} {dtype}")
        index_name, cols = INDEXES[table]
        _create_index_if_not_exists(engine, table, index_name, cols)
