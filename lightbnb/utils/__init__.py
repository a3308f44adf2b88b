"""
Utility modules for the LightBnB data access layer.
"""

from .exceptions import (
    DataAccessError,
    QueryExecutionError,
    ConstraintViolationError,
    DatabaseUnavailableError,
    is_connection_error,
    translate_database_error
)

from .query_builder import QueryParameters, ClauseList
