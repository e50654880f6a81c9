"""Booking repository"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.models.booking import Booking
from src.services.errors import StorageError

logger = logging.getLogger(__name__)

BOOKING_FIELDS = ("name", "email", "phone", "location", "message")


class BookingRepository:
    """Repository for booking form submissions"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def create(self, fields: Dict[str, Any]) -> Booking:
        """
        Store a booking.

        Args:
            fields: Validated booking fields

        Returns:
            Stored Booking

        Raises:
            StorageError: If the insert fails
        """
        booking = Booking(**{name: fields.get(name) for name in BOOKING_FIELDS})
        try:
            async with self.session_factory() as session:
                session.add(booking)
                await session.commit()
                await session.refresh(booking)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store booking from {fields.get('email')}: {e}")
            raise StorageError(f"Failed to store booking: {e}") from e

        logger.info(f"Stored booking {booking.id}")
        return booking

    async def list_bookings(self) -> List[Booking]:
        """All bookings, newest first"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list bookings: {e}")
            raise StorageError(f"Failed to list bookings: {e}") from e
