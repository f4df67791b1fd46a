"""Database-specific exceptions shared by every repository."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    code = "database_error"


class DatabaseConnectionError(DatabaseError):
    """Raised when a database engine cannot be created or reached."""

    code = "database_connection_error"


class PersistenceError(DatabaseError):
    """Raised when saving or loading an aggregate fails.

    Repositories wrap driver and ORM errors in this exception so the
    application layer can tell a failed save apart from a business error.
    A caller that receives it must discard the in-memory aggregate and
    must not release its pending events.
    """

    code = "persistence_error"

    def __init__(self, message: str, aggregate_type: str | None = None):
        super().__init__(message)
        self.aggregate_type = aggregate_type
