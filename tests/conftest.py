"""
Test configuration and fixtures for the LightBnB data access layer.
Provides an in-memory database per test, repository and service fixtures, and test data factories.
"""

import pytest
import uuid
from datetime import date, timedelta
from typing import AsyncGenerator, List, Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession

from lightbnb.config import Settings
from lightbnb.database import DatabaseContext
from lightbnb.models.user import User
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.repositories.user import UserRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.services.property_query import PropertyQueryService


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

HASHED_PASSWORD = "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at an in-memory SQLite database."""
    return Settings(environment="testing", database_url=TEST_DATABASE_URL)


@pytest.fixture
async def db_context(test_settings: Settings) -> AsyncGenerator[DatabaseContext, None]:
    """Create a fresh database with all tables for one test."""
    context = DatabaseContext.from_settings(test_settings)
    await context.create_tables()
    yield context
    await context.drop_tables()
    await context.dispose()


@pytest.fixture
async def empty_db_context(test_settings: Settings) -> AsyncGenerator[DatabaseContext, None]:
    """A database context whose tables were never created."""
    context = DatabaseContext.from_settings(test_settings)
    yield context
    await context.dispose()


@pytest.fixture
async def db_session(db_context: DatabaseContext) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_context.session() as session:
        yield session


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def reservation_repository(db_session: AsyncSession) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(db_session)


# Service fixtures
@pytest.fixture
def query_service(db_context: DatabaseContext, test_settings: Settings) -> PropertyQueryService:
    """Create a query service bound to the test database."""
    return PropertyQueryService(db_context, test_settings)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = HASHED_PASSWORD
    ) -> dict:
        """Create user data dictionary."""
        return {
            "name": name,
            "email": email or f"guest{uuid.uuid4().hex[:8]}@lighthouselabs.ca",
            "password": password
        }

    @staticmethod
    async def create_user(session: AsyncSession, **kwargs) -> User:
        """Create a test user in the database."""
        user = User(**UserFactory.create_user_data(**kwargs))
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: float = 100,
        city: str = "Vancouver",
        description: str = "A cozy test property",
        parking_spaces: int = 1,
        number_of_bathrooms: int = 1,
        number_of_bedrooms: int = 2
    ) -> dict:
        """Create an insert payload; cost_per_night in dollars."""
        return {
            "owner_id": owner_id,
            "title": title,
            "description": description,
            "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/thumb.jpeg",
            "cover_photo_url": "https://images.pexels.com/photos/2086676/cover.jpeg",
            "cost_per_night": cost_per_night,
            "street": "536 Namsub Highway",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
            "country": "Canada",
            "parking_spaces": parking_spaces,
            "number_of_bathrooms": number_of_bathrooms,
            "number_of_bedrooms": number_of_bedrooms
        }

    @staticmethod
    async def create_property(
        session: AsyncSession,
        owner_id: int,
        cost_per_night_cents: int = 10000,
        **kwargs
    ) -> Property:
        """Create a test property in the database; the price is given in cents."""
        data = PropertyFactory.create_property_data(owner_id, **kwargs)
        data["cost_per_night"] = cost_per_night_cents
        property_obj = Property(**data)
        session.add(property_obj)
        await session.commit()
        await session.refresh(property_obj)
        return property_obj


class ReservationFactory:
    """Factory for creating test reservations."""

    @staticmethod
    async def create_reservation(
        session: AsyncSession,
        property_id: int,
        guest_id: int,
        start_date: date = date(2026, 1, 10),
        end_date: Optional[date] = None
    ) -> Reservation:
        """Create a test reservation in the database."""
        reservation = Reservation(
            property_id=property_id,
            guest_id=guest_id,
            start_date=start_date,
            end_date=end_date or start_date + timedelta(days=3)
        )
        session.add(reservation)
        await session.commit()
        await session.refresh(reservation)
        return reservation


class ReviewFactory:
    """Factory for creating test property reviews."""

    @staticmethod
    async def create_reviews(
        session: AsyncSession,
        property_id: int,
        guest_id: int,
        ratings: List[int]
    ) -> List[PropertyReview]:
        """Create one review per rating for a property."""
        reviews = [
            PropertyReview(
                property_id=property_id,
                guest_id=guest_id,
                rating=rating,
                comment=f"Rated {rating}"
            )
            for rating in ratings
        ]
        session.add_all(reviews)
        await session.commit()
        return reviews


# Common test fixtures
@pytest.fixture
async def test_owner(db_session: AsyncSession) -> User:
    """Create a property owner."""
    return await UserFactory.create_user(
        db_session,
        name="Owner Person",
        email="owner@lighthouselabs.ca"
    )


@pytest.fixture
async def test_guest(db_session: AsyncSession) -> User:
    """Create a guest user."""
    return await UserFactory.create_user(
        db_session,
        name="Guest Person",
        email="guest@lighthouselabs.ca"
    )


async def create_reviewed_property(
    session: AsyncSession,
    owner_id: int,
    reviewer_id: int,
    cost_per_night_cents: int,
    ratings: Sequence[int] = (4,),
    **kwargs
) -> Property:
    """Create a property with the given review ratings."""
    property_obj = await PropertyFactory.create_property(
        session,
        owner_id=owner_id,
        cost_per_night_cents=cost_per_night_cents,
        **kwargs
    )
    await ReviewFactory.create_reviews(session, property_obj.id, reviewer_id, list(ratings))
    return property_obj
