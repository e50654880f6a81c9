"""Booking schemas"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookingCreate(BaseModel):
    """Booking form submission"""
    name: str = Field(..., min_length=1, max_length=255, description="Requester name")
    email: str = Field(..., min_length=1, max_length=255, description="Requester email")
    phone: str = Field(..., min_length=1, max_length=50, description="Requester phone")
    location: str = Field(..., min_length=1, max_length=255, description="Site location")
    message: Optional[str] = Field(None, description="Free-text message")

    @field_validator("name", "email", "phone", "location")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values"""
        if not v.strip():
            raise ValueError("Field must not be empty")
        return v.strip()


class BookingCreatedResponse(BaseModel):
    """Response for a stored booking whose notification was sent or skipped"""
    success: bool = True
    id: int


class BookingResponse(BaseModel):
    """Stored booking"""
    id: int
    name: str
    email: str
    phone: str
    location: str
    message: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
