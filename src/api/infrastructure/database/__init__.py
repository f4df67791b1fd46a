"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    PersistenceError,
)
from infrastructure.database.transactions import persistence_transaction

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "PersistenceError",
    "persistence_transaction",
]
