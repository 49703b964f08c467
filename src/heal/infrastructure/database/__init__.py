"""
Database infrastructure components.
"""

from heal.infrastructure.database.connection import (
    Base,
    DatabaseManager,
    DatabaseNotInitializedError,
    get_db_manager,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "DatabaseNotInitializedError",
    "get_db_manager",
]
