"""Database infrastructure - connection, models, and session management."""

from tasktrack.infrastructure.database.connection import (
    close_db,
    get_db,
    init_db,
)

__all__ = ["init_db", "close_db", "get_db"]
