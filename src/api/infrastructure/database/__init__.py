"""Database infrastructure - shared engine and session primitives."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
    open_read_session,
)

__all__ = [
    "close_database_connections",
    "get_read_session",
    "open_read_session",
]
