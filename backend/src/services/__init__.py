"""Services package"""

from .object_store import ObjectStoreClient
from .image_repository import ImageRepository
from .project_repository import ProjectRepository
from .booking_repository import BookingRepository
from .project_query_service import ProjectQueryService
from .upload_orchestrator import UploadOrchestrator
from .notification_service import NotificationService

__all__ = [
    "ObjectStoreClient",
    "ImageRepository",
    "ProjectRepository",
    "BookingRepository",
    "ProjectQueryService",
    "UploadOrchestrator",
    "NotificationService",
]
