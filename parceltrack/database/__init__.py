"""Database package."""

from parceltrack.database.session import (
    engine,
    SessionLocal,
    create_db_engine,
    get_db_context,
    create_all_tables,
    drop_all_tables,
)

__all__ = [
    "engine",
    "SessionLocal",
    "create_db_engine",
    "get_db_context",
    "create_all_tables",
    "drop_all_tables",
]
