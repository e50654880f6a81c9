"""Booking model"""

from sqlalchemy import Column, String, Text
from src.models.base import BaseModel


class Booking(BaseModel):
    """Booking/contact form submission"""

    __tablename__ = "bookings"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    location = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Booking(id={self.id}, email={self.email})>"
