"""
Schema bootstrap and fixture seeding.
Loads the bundled users and properties fixtures into an empty database.
"""

from lightbnb.config import Settings, get_settings
from lightbnb.database import DatabaseContext
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.property import PropertyCreate
from lightbnb.schemas.user import UserCreate
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str, fixtures_dir: Path = FIXTURES_DIR) -> List[Dict[str, Any]]:
    """
    Load a fixture file holding a JSON object keyed by id.

    Args:
        name: Fixture name without extension, e.g. "users"
        fixtures_dir: Directory containing the fixture files

    Returns:
        Fixture entries ordered by their numeric key
    """
    path = fixtures_dir / f"{name}.json"
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"Fixture {path} must contain a JSON object keyed by id")

    return [data[key] for key in sorted(data, key=int)]


class DatabaseManager:
    """Creates, drops, seeds and resets the LightBnB schema."""

    def __init__(
        self,
        context: DatabaseContext,
        settings: Optional[Settings] = None,
        fixtures_dir: Path = FIXTURES_DIR
    ):
        self.context = context
        self.settings = settings or get_settings()
        self.fixtures_dir = fixtures_dir

    def _ensure_not_production(self, action: str) -> None:
        if self.settings.is_production:
            raise RuntimeError(f"Cannot {action} in production environment")

    async def check_connection(self) -> bool:
        return await self.context.ping()

    async def create_tables(self) -> None:
        await self.context.create_tables()

    async def drop_tables(self) -> None:
        """Drop all tables. Refused in production."""
        self._ensure_not_production("drop tables")
        await self.context.drop_tables()

    async def seed(self) -> Dict[str, int]:
        """
        Seed the database with the bundled fixtures.

        Fixture owner ids are remapped to the ids generated for the inserted users.
        Seeding is skipped when the users table already has rows. All rows are
        committed together, so a bad fixture leaves the database empty.

        Returns:
            Number of users and properties inserted
        """
        counts = {"users": 0, "properties": 0}

        async with self.context.session() as session:
            user_repo = UserRepository(session)
            property_repo = PropertyRepository(session)

            if await user_repo.count() > 0:
                logger.info("Users already exist, skipping seed")
                return counts

            owner_ids: Dict[int, int] = {}
            for entry in load_fixture("users", self.fixtures_dir):
                user = await user_repo.create_user(UserCreate.model_validate(entry), commit=False)
                owner_ids[int(entry["id"])] = user.id
                counts["users"] += 1

            for entry in load_fixture("properties", self.fixtures_dir):
                fixture_owner = int(entry["owner_id"])
                if fixture_owner not in owner_ids:
                    raise ValueError(f"Property fixture {entry.get('id')} references unknown owner {fixture_owner}")
                payload = PropertyCreate.model_validate({**entry, "owner_id": owner_ids[fixture_owner]})
                await property_repo.create_property(payload, commit=False)
                counts["properties"] += 1

            await session.commit()

        logger.info(f"Database seeded: {counts['users']} users, {counts['properties']} properties")
        return counts

    async def reset(self) -> Dict[str, int]:
        """Drop and recreate all tables, then seed. Refused in production."""
        logger.warning("Resetting database - all data will be lost!")
        self._ensure_not_production("reset the database")

        await self.context.drop_tables()
        await self.context.create_tables()
        counts = await self.seed()

        logger.info("Database reset completed")
        return counts
