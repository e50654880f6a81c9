"""Pytest configuration and shared fixtures"""

import threading
import time
from datetime import date
from typing import AsyncGenerator, List, Optional, Set

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.main import app
from src.api.dependencies import get_notification_service, get_object_store
from src.config import Settings
from src.database import Base, build_engine, build_session_factory, get_session_factory
from src.models import Project
from src.services.booking_repository import BookingRepository
from src.services.image_repository import ImageRepository
from src.services.notification_service import NotificationService
from src.services.object_store import ObjectStoreConnectionError, ObjectStoreError
from src.services.project_repository import ProjectRepository
from src.services.project_query_service import ProjectQueryService


class FakeObjectStore:
    """
    In-memory stand-in for ObjectStoreClient.

    Uploads whose bytes are in ``fail_on`` raise ObjectStoreError; ``delay``
    makes every upload block for that many seconds.
    """

    bucket_url = "https://test-bucket.s3.us-east-1.amazonaws.com/projects"

    def __init__(self):
        self.calls: List[dict] = []
        self.threads: List[str] = []
        self.fail_on: Set[bytes] = set()
        self.delay: float = 0.0
        self.connected = True
        self._lock = threading.Lock()

    def upload_image(
        self,
        project_id: int,
        file_bytes: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> str:
        with self._lock:
            self.calls.append({
                "project_id": project_id,
                "data": file_bytes,
                "content_type": content_type,
                "filename": filename,
            })
            self.threads.append(threading.current_thread().name)
        if self.delay:
            time.sleep(self.delay)
        if file_bytes in self.fail_on:
            raise ObjectStoreError("Failed to upload image: SlowDown")
        return f"{self.bucket_url}/{project_id}/{filename}"

    def check_connection(self) -> None:
        if not self.connected:
            raise ObjectStoreConnectionError("disconnected: EndpointConnectionError")


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine backed by a throw-away SQLite file"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine"""
    return build_session_factory(test_engine)


@pytest.fixture
def image_repository(session_factory) -> ImageRepository:
    return ImageRepository(session_factory)


@pytest.fixture
def project_repository(session_factory, image_repository) -> ProjectRepository:
    return ProjectRepository(session_factory, image_repository)


@pytest.fixture
def booking_repository(session_factory) -> BookingRepository:
    return BookingRepository(session_factory)


@pytest.fixture
def query_service(project_repository, image_repository) -> ProjectQueryService:
    return ProjectQueryService(project_repository, image_repository)


@pytest.fixture
def fake_object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def notification_service() -> NotificationService:
    """Notification service with SMTP configured; tests patch smtplib.SMTP"""
    return NotificationService(
        Settings(
            smtp_host="smtp.test",
            smtp_port=587,
            smtp_username="builder@example.com",
            smtp_password="secret",
        )
    )


@pytest.fixture
def project_fields():
    """Sample project fields"""
    return {
        "title": "Kitchen Remodel",
        "description": "Full gut and remodel",
        "owner_name": "John Smithson",
        "location": "Austin, TX",
        "completion_date": date(2024, 5, 17),
    }


@pytest_asyncio.fixture
async def sample_project(project_repository, project_fields) -> Project:
    """Create a sample project for testing"""
    project_id = await project_repository.create(project_fields)
    return await project_repository.get(project_id)


@pytest_asyncio.fixture
async def async_client(
    session_factory, fake_object_store, notification_service
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with database and external services overridden"""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_object_store] = lambda: fake_object_store
    app.dependency_overrides[get_notification_service] = lambda: notification_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
