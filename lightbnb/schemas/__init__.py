"""
Pydantic schemas for payloads accepted and records returned by the data access layer.
"""

from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.schemas.property import (
    PropertyCreate,
    PropertyRecord,
    PropertySearchOptions,
    dollars_to_cents,
)
from lightbnb.schemas.reservation import ReservationRecord

__all__ = [
    "UserCreate",
    "UserRecord",
    "PropertyCreate",
    "PropertyRecord",
    "PropertySearchOptions",
    "ReservationRecord",
    "dollars_to_cents",
]
