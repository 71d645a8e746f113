"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError for easy catching.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when database connection or initialization fails.

    Examples:
    - Invalid database URL format
    - Database file not accessible
    - get_session() called before init_database()
    """

    pass


class RecordNotFoundError(PersistenceError):
    """Raised when a required database record is not found.

    For optional lookups, repository methods return None instead of raising this.
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a database constraint violation occurs."""

    pass


class ConflictError(DataIntegrityError):
    """Raised when a conditional insert loses to an existing row.

    Used by insert-if-no-conflict operations whose uniqueness guarantee is
    enforced by the database (primary key or unique index).
    """

    pass
