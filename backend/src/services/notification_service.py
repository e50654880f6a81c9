"""Email notifications for booking submissions"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from src.config import Settings, settings as default_settings
from src.models.booking import Booking
from src.services.errors import NotificationError

logger = logging.getLogger(__name__)


class NotificationService:
    """Sends booking notification emails over SMTP"""

    def __init__(self, config: Optional[Settings] = None):
        """
        Initialize notification service.

        Args:
            config: Settings with SMTP credentials (default: global settings)
        """
        self.config = config or default_settings

    @property
    def enabled(self) -> bool:
        """True when an SMTP host and a recipient are configured"""
        return bool(self.config.smtp_host and self.config.notification_to)

    def build_booking_message(self, booking: Booking) -> EmailMessage:
        """Build the notification email for a booking"""
        message = EmailMessage()
        message["Subject"] = f"New Booking from {booking.name}"
        message["From"] = self.config.smtp_username or booking.email
        message["To"] = self.config.notification_to
        message["Reply-To"] = booking.email
        message.set_content(
            f"Name: {booking.name}\n"
            f"Email: {booking.email}\n"
            f"Phone: {booking.phone}\n"
            f"Location: {booking.location}\n"
            f"Message: {booking.message or ''}"
        )
        return message

    async def send_booking_notification(self, booking: Booking) -> bool:
        """
        Email the configured recipient about a new booking.

        Returns:
            True if sent, False if notifications are not configured

        Raises:
            NotificationError: If the email could not be sent
        """
        if not self.enabled:
            logger.warning(
                f"SMTP not configured; skipping notification for booking {booking.id}"
            )
            return False

        message = self.build_booking_message(booking)
        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send notification for booking {booking.id}: {e}")
            raise NotificationError(f"Failed to send booking notification: {e}") from e

        logger.info(f"Sent notification for booking {booking.id} to {message['To']}")
        return True

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.smtp_host,
            self.config.smtp_port,
            timeout=self.config.smtp_timeout_seconds,
        ) as smtp:
            if self.config.smtp_use_tls:
                smtp.starttls()
            if self.config.smtp_username and self.config.smtp_password:
                smtp.login(self.config.smtp_username, self.config.smtp_password)
            smtp.send_message(message)
