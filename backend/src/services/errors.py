"""Domain exceptions shared by repositories, services and API routes"""

from typing import Optional


class BuilderError(Exception):
    """Base exception for all domain errors"""
    pass


class InputValidationError(BuilderError):
    """A required input is missing or empty"""
    pass


class NotFoundError(BuilderError):
    """Referenced entity does not exist"""
    pass


class QuotaExceededError(BuilderError):
    """Image batch would push a project past its image limit"""

    def __init__(self, limit: int, current: int, requested: int):
        self.limit = limit
        self.current = current
        self.requested = requested
        self.remaining = max(0, limit - current)
        super().__init__(
            f"Max {limit} images allowed per project; "
            f"{requested} submitted but only {self.remaining} more can be added"
        )


class StorageError(BuilderError):
    """Durable store fault"""
    pass


class ConstraintError(StorageError):
    """Write rejected by a database constraint (e.g. unknown project)"""
    pass


class UploadFailedError(BuilderError):
    """Object store rejected or timed out on a single file"""
    pass


class PersistFailedError(BuilderError):
    """Upload succeeded but the image record could not be written"""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class NotificationError(BuilderError):
    """Notification email could not be sent"""
    pass
