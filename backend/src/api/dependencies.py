"""API dependencies wiring repositories and services"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.database import get_session_factory
from src.services.booking_repository import BookingRepository
from src.services.image_repository import ImageRepository
from src.services.notification_service import NotificationService
from src.services.object_store import ObjectStoreClient
from src.services.project_query_service import ProjectQueryService
from src.services.project_repository import ProjectRepository
from src.services.upload_orchestrator import UploadOrchestrator


@lru_cache
def get_object_store() -> ObjectStoreClient:
    """Process-wide object store client (boto3 clients are thread-safe)"""
    return ObjectStoreClient()


@lru_cache
def get_notification_service() -> NotificationService:
    """Process-wide notification service"""
    return NotificationService()


def get_image_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ImageRepository:
    return ImageRepository(session_factory)


def get_project_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    image_repository: ImageRepository = Depends(get_image_repository),
) -> ProjectRepository:
    return ProjectRepository(session_factory, image_repository)


def get_booking_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BookingRepository:
    return BookingRepository(session_factory)


def get_project_query_service(
    project_repository: ProjectRepository = Depends(get_project_repository),
    image_repository: ImageRepository = Depends(get_image_repository),
) -> ProjectQueryService:
    return ProjectQueryService(project_repository, image_repository)


def get_upload_orchestrator(
    project_repository: ProjectRepository = Depends(get_project_repository),
    image_repository: ImageRepository = Depends(get_image_repository),
    object_store: ObjectStoreClient = Depends(get_object_store),
) -> UploadOrchestrator:
    """Orchestrator for one request; per-project locks are shared process-wide"""
    return UploadOrchestrator(project_repository, image_repository, object_store)
