"""
Property query service: the operations the web application calls to read and write
users, properties and reservations.
Every operation returns a QueryResult, so "not found" (ok, value None) is never
confused with a database failure (error set).
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.config import Settings, get_settings
from lightbnb.database import DatabaseContext
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.property import PropertyCreate, PropertyRecord, PropertySearchOptions
from lightbnb.schemas.reservation import ReservationRecord
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.services.result import QueryResult
from lightbnb.utils.exceptions import CONNECTION_ERRORS, translate_database_error
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar, Union
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A refused connect surfaces as a raw OSError from the driver, not a SQLAlchemyError
DATABASE_FAULTS = (SQLAlchemyError,) + CONNECTION_ERRORS


class PropertyQueryService:
    """
    Stateless query operations over an injected database context.
    Each call checks out its own session; calls are independent of each other.
    """

    def __init__(self, context: DatabaseContext, settings: Optional[Settings] = None):
        self.context = context
        self.settings = settings or get_settings()

    async def _execute(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]]
    ) -> QueryResult[T]:
        """
        Run one unit of work in a fresh session and wrap the outcome.

        Database and connection faults are logged and returned as typed errors.
        """
        try:
            async with self.context.session() as session:
                value = await work(session)
            return QueryResult.success(value)
        except DATABASE_FAULTS as e:
            error = translate_database_error(e, operation=operation)
            logger.error(f"{operation} failed [{error.error_code}]: {error.detail}")
            return QueryResult.failure(error)

    def _resolve_limit(self, limit: Optional[int], default: int) -> int:
        if limit is None:
            return default
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        return limit

    # Users

    async def get_user_with_email(self, email: str) -> QueryResult[UserRecord]:
        """
        Get a single user by email.

        Args:
            email: Exact, case-sensitive email address

        Returns:
            QueryResult holding the user record, or None if no user matches
        """
        async def work(session: AsyncSession) -> Optional[UserRecord]:
            user = await UserRepository(session).get_by_email(email)
            return UserRecord.model_validate(user) if user else None

        return await self._execute("get_user_with_email", work)

    async def get_user_with_id(self, user_id: int) -> QueryResult[UserRecord]:
        """
        Get a single user by primary key.

        Args:
            user_id: ID of the user

        Returns:
            QueryResult holding the user record, or None if no user matches
        """
        async def work(session: AsyncSession) -> Optional[UserRecord]:
            user = await UserRepository(session).get_by_id(user_id)
            return UserRecord.model_validate(user) if user else None

        return await self._execute("get_user_with_id", work)

    async def add_user(self, user: Union[UserCreate, Dict[str, Any]]) -> QueryResult[UserRecord]:
        """
        Add a new user.

        Args:
            user: name, email and an already hashed password

        Returns:
            QueryResult holding the inserted user including its generated id;
            a duplicate email yields a ConstraintViolationError

        Raises:
            pydantic.ValidationError: If the payload is malformed
        """
        user_data = UserCreate.model_validate(user)

        async def work(session: AsyncSession) -> UserRecord:
            created = await UserRepository(session).create_user(user_data)
            return UserRecord.model_validate(created)

        return await self._execute("add_user", work)

    # Reservations

    async def get_all_reservations(self, guest_id: int, limit: Optional[int] = None) -> QueryResult[List[ReservationRecord]]:
        """
        Get all reservations for a single guest.

        Args:
            guest_id: ID of the guest user
            limit: Maximum number of reservations, defaults to the configured limit

        Returns:
            QueryResult holding reservations ordered by start date, each annotated
            with its property's average rating
        """
        limit = self._resolve_limit(limit, self.settings.default_reservation_limit)

        async def work(session: AsyncSession) -> List[ReservationRecord]:
            rows = await ReservationRepository(session).get_reservations_for_guest(guest_id, limit)
            return [ReservationRecord.model_validate(row) for row in rows]

        return await self._execute("get_all_reservations", work)

    # Properties

    async def get_all_properties(
        self,
        options: Union[PropertySearchOptions, Dict[str, Any], None] = None,
        limit: Optional[int] = None
    ) -> QueryResult[List[PropertyRecord]]:
        """
        Search properties.

        Args:
            options: city, owner_id, minimum/maximum price per night (dollars)
                and minimum_rating; all optional
            limit: Maximum number of properties, defaults to the configured limit

        Returns:
            QueryResult holding properties ordered by cost_per_night ascending;
            an empty list when nothing matches

        Raises:
            pydantic.ValidationError: If the options are malformed
        """
        search_options = PropertySearchOptions.model_validate(options or {})
        limit = self._resolve_limit(limit, self.settings.default_property_limit)

        async def work(session: AsyncSession) -> List[PropertyRecord]:
            rows = await PropertyRepository(session).search_properties(search_options, limit)
            return [PropertyRecord.model_validate(row) for row in rows]

        return await self._execute("get_all_properties", work)

    async def add_property(self, property_data: Union[PropertyCreate, Dict[str, Any]]) -> QueryResult[PropertyRecord]:
        """
        Add a property listing.

        Args:
            property_data: The fourteen insert fields, owner_id through
                number_of_bedrooms, with cost_per_night in dollars

        Returns:
            QueryResult holding the inserted property including its generated id

        Raises:
            pydantic.ValidationError: If the payload is malformed
        """
        payload = PropertyCreate.model_validate(property_data)

        async def work(session: AsyncSession) -> PropertyRecord:
            created = await PropertyRepository(session).create_property(payload)
            return PropertyRecord.model_validate(created)

        return await self._execute("add_property", work)
