"""Persistence layer for database operations using SQLAlchemy (SQLite by default).

This module provides the public API for database operations including:
- Database initialization and connection management
- Repository classes for the skill registry and match records
- Custom exceptions for error handling

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repository classes
    - SkillRepository: lookups and atomic insert-if-absent for skills
    - MatchRepository: conditional inserts and status updates for matches

    # Exceptions
    - PersistenceError: Base exception for all persistence errors
    - DatabaseConnectionError: Database connection/initialization failures
    - RecordNotFoundError: Required record not found
    - DataIntegrityError: Constraint violations
    - ConflictError: Conditional insert lost to an existing row

Example usage:
    >>> from skillmatch.persistence import init_database, get_session, SkillRepository
    >>>
    >>> init_database("sqlite:///./data/skillmatch.db")
    >>>
    >>> with get_session() as session:
    ...     repo = SkillRepository(session)
    ...     skill = repo.find_by_normalized_name("react")
"""

# Database initialization and session management
from .database import close_database, get_engine, get_session, init_database

# Repository classes
from .repositories import MatchRepository, SkillRepository

# Exceptions
from .exceptions import (
    ConflictError,
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)

# Public API exports
__all__ = [
    # Database functions
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    # Repositories
    "SkillRepository",
    "MatchRepository",
    # Exceptions
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
    "ConflictError",
]
