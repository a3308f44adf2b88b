"""
Result-or-error container returned by every service operation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar
from lightbnb.utils.exceptions import DataAccessError

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """
    Outcome of one data access operation.

    On success ``value`` holds the record, list of records, or None for
    "not found". On failure ``error`` holds the typed error and ``value`` is None.
    """
    value: Optional[T] = None
    error: Optional[DataAccessError] = None

    @classmethod
    def success(cls, value: Optional[T]) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DataAccessError) -> "QueryResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def found(self) -> bool:
        """True when the operation succeeded and produced a value."""
        return self.ok and self.value is not None

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the stored error if the operation failed."""
        if self.error is not None:
            raise self.error
        return self.value

    def to_error_response(self) -> Optional[Dict[str, Any]]:
        """Error payload in the shape the presentation layer renders, or None on success."""
        if self.error is None:
            return None
        response = {
            "error": {
                "code": self.error.error_code,
                "message": self.error.detail,
            }
        }
        if self.error.operation:
            response["error"]["operation"] = self.error.operation
        return response
