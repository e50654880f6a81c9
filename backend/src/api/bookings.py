"""Booking form endpoints"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Request, status

from src.api.dependencies import get_booking_repository, get_notification_service
from src.api.errors import internal_server_error, notification_failed_error
from src.monitoring.metrics import metrics_collector
from src.schemas.booking import BookingCreate, BookingCreatedResponse, BookingResponse
from src.services.booking_repository import BookingRepository
from src.services.errors import NotificationError, StorageError
from src.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_200_OK)
async def create_booking(
    booking_in: BookingCreate,
    request: Request,
    repository: BookingRepository = Depends(get_booking_repository),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Store a booking and email a notification.

    The booking stays stored when the email fails; the response then says
    so with a distinct 500 problem that carries the booking ID.
    """
    try:
        booking = await repository.create(booking_in.model_dump())
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    try:
        sent = await notifier.send_booking_notification(booking)
    except NotificationError as e:
        logger.error(f"Booking {booking.id} saved but notification failed: {e}")
        metrics_collector.record_booking("failed")
        return notification_failed_error(booking.id, instance=request.url.path)

    metrics_collector.record_booking("sent" if sent else "skipped")
    return BookingCreatedResponse(success=True, id=booking.id)


@router.get("", response_model=List[BookingResponse], status_code=status.HTTP_200_OK)
async def list_bookings(
    request: Request,
    repository: BookingRepository = Depends(get_booking_repository),
):
    """Get every booking, newest first"""
    try:
        bookings = await repository.list_bookings()
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    return [BookingResponse.model_validate(booking) for booking in bookings]
