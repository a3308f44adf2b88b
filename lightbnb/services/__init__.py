"""
Service layer exposing the data access operations to callers.
"""

from lightbnb.services.result import QueryResult
from lightbnb.services.property_query import PropertyQueryService

__all__ = [
    "QueryResult",
    "PropertyQueryService",
]
