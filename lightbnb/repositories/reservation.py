"""
Reservation repository: a guest's bookings joined with property details and ratings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from lightbnb.repositories.base import BaseRepository
from lightbnb.models.reservation import Reservation
from lightbnb.models.property import Property
from lightbnb.models.review import PropertyReview
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# Property columns reported alongside each reservation
RESERVATION_PROPERTY_COLUMNS = (
    Property.title,
    Property.cost_per_night,
    Property.thumbnail_photo_url,
    Property.number_of_bedrooms,
    Property.number_of_bathrooms,
    Property.parking_spaces,
    Property.country,
    Property.street,
    Property.city,
    Property.province,
    Property.post_code,
)


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for reservations."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Reservation, db)
    
    def build_guest_reservations_query(self, guest_id: int, limit: int):
        """
        Reservations of one guest, earliest start first.
        Reviews are outer-joined so unreviewed properties still appear with a NULL average.
        """
        return (
            select(
                Reservation.__table__,
                *RESERVATION_PROPERTY_COLUMNS,
                func.avg(PropertyReview.rating).label("average_rating"),
            )
            .select_from(Reservation)
            .join(Property, Reservation.property_id == Property.id)
            .outerjoin(PropertyReview, Property.id == PropertyReview.property_id)
            .where(Reservation.guest_id == guest_id)
            .group_by(Reservation.id, Property.id)
            .order_by(Reservation.start_date)
            .limit(limit)
        )
    
    async def get_reservations_for_guest(self, guest_id: int, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get reservations for a guest with property details and average rating.
        
        Args:
            guest_id: ID of the guest user
            limit: Maximum number of reservations to return
            
        Returns:
            List of row dictionaries
        """
        try:
            query = self.build_guest_reservations_query(guest_id, limit)
            result = await self.db.execute(query)
            rows = [dict(row) for row in result.mappings().all()]
            
            logger.debug(f"Retrieved {len(rows)} reservations for guest {guest_id}")
            return rows
        except Exception as e:
            logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
            raise
