"""
Pydantic schema for reservation listing rows.
"""

from pydantic import BaseModel
from datetime import date
from typing import Optional


class ReservationRecord(BaseModel):
    """
    A reservation joined with the reserved property's summary.
    average_rating is None when the property has no reviews yet.
    """
    
    # Reservation columns
    id: int
    property_id: int
    guest_id: int
    start_date: date
    end_date: date
    
    # Property columns
    title: str
    cost_per_night: int
    thumbnail_photo_url: str
    number_of_bedrooms: int
    number_of_bathrooms: int
    parking_spaces: int
    country: str
    street: str
    city: str
    province: str
    post_code: str
    
    average_rating: Optional[float] = None
    
    model_config = {"from_attributes": True}
