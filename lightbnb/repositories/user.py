"""
User repository for lookups and inserts on the users table.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.user import User
from lightbnb.schemas.user import UserCreate
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.
        The match is exact and case-sensitive; no normalization is applied.
        
        Args:
            email: Email address to search for
            
        Returns:
            User instance if found, None otherwise
        """
        return await self.get_by_field("email", email)
    
    async def create_user(self, user_data: UserCreate, commit: bool = True) -> User:
        """
        Insert a user row.
        Uniqueness of the email is enforced by the database constraint only.
        
        Args:
            user_data: Validated user payload
            commit: Commit immediately, or only flush within the current transaction
            
        Returns:
            Created user instance including its generated id
        """
        created_user = await self.create(user_data.model_dump(), commit=commit)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user
