"""
Custom exception classes for the data access layer.
Each error carries a stable error code the presentation layer can map to a response.
"""

from typing import Optional
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
import asyncio


class DataAccessError(Exception):
    """Base data access exception class."""
    
    def __init__(
        self,
        detail: str,
        error_code: str = "DATA_ACCESS_ERROR",
        operation: Optional[str] = None
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code
        self.operation = operation
    
    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.detail}"
        return self.detail


class QueryExecutionError(DataAccessError):
    """A statement failed to execute."""
    
    def __init__(self, detail: str, operation: Optional[str] = None):
        super().__init__(detail, error_code="QUERY_FAILED", operation=operation)


class ConstraintViolationError(DataAccessError):
    """An insert or update violated a table constraint."""
    
    def __init__(self, detail: str, operation: Optional[str] = None):
        super().__init__(detail, error_code="CONSTRAINT_VIOLATION", operation=operation)


class DatabaseUnavailableError(DataAccessError):
    """The database could not be reached."""
    
    def __init__(self, detail: str = "Database unavailable", operation: Optional[str] = None):
        super().__init__(detail, error_code="DATABASE_UNAVAILABLE", operation=operation)


# Faults raised while reaching the server rather than while running a statement
CONNECTION_ERRORS = (OSError, asyncio.TimeoutError, PoolTimeoutError)


def _driver_message(exc: Exception) -> str:
    """Prefer the driver's own message over SQLAlchemy's wrapped text."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc) or exc.__class__.__name__


def is_connection_error(exc: Exception) -> bool:
    """Whether the exception means the database could not be reached."""
    if isinstance(exc, CONNECTION_ERRORS):
        return True
    if isinstance(exc, DBAPIError):
        return exc.connection_invalidated or isinstance(exc.orig, CONNECTION_ERRORS)
    return False


def translate_database_error(exc: Exception, operation: Optional[str] = None) -> DataAccessError:
    """
    Map a database or connection exception onto the data access error taxonomy.
    
    Args:
        exc: Exception raised by the engine, session or driver
        operation: Name of the operation that failed
        
    Returns:
        Typed DataAccessError
    """
    message = _driver_message(exc)
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError(message, operation=operation)
    if is_connection_error(exc):
        return DatabaseUnavailableError(message, operation=operation)
    return QueryExecutionError(message, operation=operation)
