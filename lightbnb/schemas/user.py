"""
Pydantic schemas for user payloads and records.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Schema for inserting a new user. The password is expected to be hashed already."""
    
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name"
    )
    
    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="User's email address, stored exactly as given"
    )
    
    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Password hash"
    )
    
    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()
    
    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v):
        """Reject malformed addresses without rewriting the stored value."""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email address: {e}")
        return v
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Devin Sanders",
                "email": "tristanjacobs@gmail.com",
                "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."
            }
        }
    }


class UserRecord(BaseModel):
    """A row of the users table."""
    
    id: int
    name: str
    email: str
    password: str
    
    model_config = {"from_attributes": True}
