"""
Driver-neutral access to the AfyaConnect store.

When DATABASE_URL is present every connection goes to PostgreSQL through
psycopg2; otherwise a SQLite file at DB_PATH is used. Services write SQL
once with ``sql_placeholder()`` and read rows back as plain dicts, so the
rest of the code never branches on the driver except for RETURNING.
"""

import os
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any

from afyaconnect.core.config import Environment, settings

SQLITE_BUSY_TIMEOUT = 10
LIKE_ESCAPE = "\\"


def is_postgres_mode() -> bool:
    return bool(os.getenv("DATABASE_URL"))


def sql_placeholder() -> str:
    """DB-API paramstyle marker: ``%s`` for psycopg2, ``?`` for sqlite3."""
    return "%s" if is_postgres_mode() else "?"


def sql_placeholders(count: int) -> str:
    if count < 1:
        raise ValueError(f"need at least one placeholder, got {count}")
    return ", ".join([sql_placeholder()] * count)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def like_pattern(term: str) -> str:
    """Case-folded ``%term%`` in which ``%``, ``_`` and the escape match literally."""
    folded = term.strip().lower()
    for char in (LIKE_ESCAPE, "%", "_"):
        folded = folded.replace(char, LIKE_ESCAPE + char)
    return f"%{folded}%"


def contains_clause(column: str) -> str:
    """Predicate pairing with ``like_pattern``: NULL columns never match."""
    return (
        f"LOWER(COALESCE({column}, '')) LIKE {sql_placeholder()} "
        f"ESCAPE '{LIKE_ESCAPE}'"
    )


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def get_connection(db_path: str | None = None) -> Any:
    """Open a new connection; the caller owns it and must close it.

    ``db_path`` only applies to SQLite and falls back to settings.DB_PATH.
    Production refuses to run on SQLite.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        import psycopg2

        return psycopg2.connect(database_url)

    if settings.ENVIRONMENT is Environment.PRODUCTION:
        raise RuntimeError("Production needs PostgreSQL: set DATABASE_URL.")

    import sqlite3

    conn = sqlite3.connect(db_path or settings.DB_PATH, timeout=SQLITE_BUSY_TIMEOUT)
    # built-in LOWER only folds ASCII; match Python's str.lower used on terms
    conn.create_function("LOWER", 1, _unicode_lower, deterministic=True)
    return conn


@contextmanager
def db_cursor(db_path: str | None = None) -> Iterator[tuple[Any, Any]]:
    """Connection plus cursor for one unit of work.

    Committing is left to the caller; anything uncommitted when the block
    exits is discarded with the connection.
    """
    conn = get_connection(db_path)
    cursor = conn.cursor()
    try:
        yield conn, cursor
    finally:
        cursor.close()
        conn.close()


def _json_safe(value: Any) -> Any:
    # psycopg2 hands back datetime objects where sqlite3 returns ISO text
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _as_dict(cursor: Any, row: Sequence[Any]) -> dict[str, Any]:
    names = (column[0] for column in cursor.description)
    return {name: _json_safe(value) for name, value in zip(names, row)}


def fetch_dicts(cursor: Any) -> list[dict[str, Any]]:
    return [_as_dict(cursor, row) for row in cursor.fetchall()]


def fetch_dict(cursor: Any) -> dict[str, Any] | None:
    row = cursor.fetchone()
    return None if row is None else _as_dict(cursor, row)


def insert_returning_id(cursor: Any, sql: str, params: Sequence[Any]) -> int:
    """Execute an INSERT and report the new primary key on either driver."""
    if is_postgres_mode():
        cursor.execute(f"{sql} RETURNING id", params)
        return cursor.fetchone()[0]
    cursor.execute(sql, params)
    return cursor.lastrowid
