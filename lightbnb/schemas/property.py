"""
Pydantic schemas for property payloads, search options and records.
Prices cross this boundary in dollars; the database stores integer cents.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union
from lightbnb.models.property import PROPERTY_INSERT_FIELDS


def dollars_to_cents(amount: Union[Decimal, int, float]) -> int:
    """Convert a dollar amount to integer cents, rounding half up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.to_integral_value(rounding=ROUND_HALF_UP))


class PropertyCreate(BaseModel):
    """Schema for inserting a new property listing."""
    
    owner_id: int = Field(..., gt=0, description="ID of the owning user")
    title: str = Field(..., min_length=1, max_length=255, description="Listing title")
    description: str = Field("", max_length=5000, description="Listing description")
    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)
    
    cost_per_night: Decimal = Field(
        ...,
        ge=0,
        description="Nightly price in dollars"
    )
    
    street: str = Field(..., max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., max_length=255)
    post_code: str = Field(..., max_length=255)
    country: str = Field(..., max_length=255)
    
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
    
    @field_validator('title', 'city')
    @classmethod
    def validate_not_blank(cls, v):
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()
    
    def to_row(self) -> Dict[str, Any]:
        """Column values for the insert, in insert order, with the price in cents."""
        values = self.model_dump()
        values["cost_per_night"] = dollars_to_cents(self.cost_per_night)
        return {field: values[field] for field in PROPERTY_INSERT_FIELDS}
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "owner_id": 1,
                "title": "Speed lamp",
                "description": "description",
                "thumbnail_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg?auto=compress&cs=tinysrgb&h=350",
                "cover_photo_url": "https://images.pexels.com/photos/2086676/pexels-photo-2086676.jpeg",
                "cost_per_night": 930.61,
                "street": "536 Namsub Highway",
                "city": "Sotboske",
                "province": "Quebec",
                "post_code": "28142",
                "country": "Canada",
                "parking_spaces": 6,
                "number_of_bathrooms": 4,
                "number_of_bedrooms": 8
            }
        }
    }


class PropertySearchOptions(BaseModel):
    """Optional filters for the property search. Prices are in dollars."""
    
    city: Optional[str] = Field(
        None,
        max_length=255,
        description="Case-insensitive partial match on city"
    )
    
    owner_id: Optional[int] = Field(
        None,
        gt=0,
        description="Only properties owned by this user"
    )
    
    minimum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Lower bound on the nightly price, in dollars"
    )
    
    maximum_price_per_night: Optional[Decimal] = Field(
        None,
        ge=0,
        description="Upper bound on the nightly price, in dollars"
    )
    
    minimum_rating: Optional[float] = Field(
        None,
        ge=0,
        le=5,
        description="Lower bound on the average review rating"
    )
    
    @field_validator('city')
    @classmethod
    def blank_city_is_none(cls, v):
        """Treat an empty city as no filter."""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v
    
    @model_validator(mode='after')
    def validate_price_range(self):
        """Validate that the minimum price does not exceed the maximum price."""
        if (
            self.minimum_price_per_night is not None
            and self.maximum_price_per_night is not None
            and self.minimum_price_per_night > self.maximum_price_per_night
        ):
            raise ValueError("minimum_price_per_night cannot exceed maximum_price_per_night")
        return self


class PropertyRecord(BaseModel):
    """A row of the properties table plus its average review rating."""
    
    id: int
    owner_id: int
    title: str
    description: str
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int
    number_of_bathrooms: int
    number_of_bedrooms: int
    country: str
    street: str
    city: str
    province: str
    post_code: str
    active: bool = True
    average_rating: Optional[float] = None
    
    model_config = {"from_attributes": True}
