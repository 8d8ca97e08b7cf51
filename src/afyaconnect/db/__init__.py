from afyaconnect.db.connection import (
    db_cursor,
    get_connection,
    is_postgres_mode,
    sql_placeholder,
    sql_placeholders,
)
from afyaconnect.db.schema import SCHEMA_SQL, SQLITE_SCHEMA_SQL, ensure_db, open_db

__all__ = [
    "SCHEMA_SQL",
    "SQLITE_SCHEMA_SQL",
    "db_cursor",
    "ensure_db",
    "get_connection",
    "is_postgres_mode",
    "open_db",
    "sql_placeholder",
    "sql_placeholders",
]
