"""Image repository: durable project -> image URL mapping"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.models.image import Image
from src.services.errors import ConstraintError, StorageError

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Repository for project images.

    Every public method opens its own session from the shared factory, so
    concurrent callers never share a session. The image cap is not checked
    here; the upload orchestrator decides it for a whole batch.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize with the shared session factory"""
        self.session_factory = session_factory

    async def count_images(self, project_id: int) -> int:
        """
        Count images currently attached to a project.

        Raises:
            StorageError: If the query fails
        """
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(func.count(Image.id)).where(Image.project_id == project_id)
                )
                return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to count images for project {project_id}: {e}")
            raise StorageError(f"Failed to count images: {e}") from e

    async def add_image(self, project_id: int, url: str) -> Image:
        """
        Insert a new image row in its own transaction.

        Args:
            project_id: Owning project ID
            url: Object store URL of the uploaded image

        Returns:
            Created Image

        Raises:
            ConstraintError: If the project does not exist
            StorageError: If the insert fails for any other reason
        """
        image = Image(project_id=project_id, image_url=url)
        try:
            async with self.session_factory() as session:
                session.add(image)
                await session.commit()
                await session.refresh(image)
        except IntegrityError as e:
            logger.error(f"Project {project_id} rejected image {url}: {e}")
            raise ConstraintError(f"Project {project_id} does not exist") from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to store image {url} for project {project_id}: {e}")
            raise StorageError(f"Failed to store image: {e}") from e

        logger.info(f"Stored image {image.id} for project {project_id}")
        return image

    async def list_image_urls(self, project_id: int) -> List[str]:
        """Image URLs for a project in insertion order (empty list if none)"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Image.image_url)
                    .where(Image.project_id == project_id)
                    .order_by(Image.created_at, Image.id)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list images for project {project_id}: {e}")
            raise StorageError(f"Failed to list images: {e}") from e

    async def list_images(self) -> List[Image]:
        """All images across projects, newest first"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Image).order_by(Image.created_at.desc(), Image.id.desc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list images: {e}")
            raise StorageError(f"Failed to list images: {e}") from e

    async def delete_all_for_project(
        self, project_id: int, session: Optional[AsyncSession] = None
    ) -> int:
        """
        Delete every image of a project. Idempotent.

        When a session is passed the delete joins the caller's transaction
        and is not committed here.

        Returns:
            Number of rows deleted
        """
        statement = delete(Image).where(Image.project_id == project_id)

        if session is not None:
            try:
                result = await session.execute(statement)
            except SQLAlchemyError as e:
                logger.error(f"Failed to delete images for project {project_id}: {e}")
                raise StorageError(f"Failed to delete images: {e}") from e
            return result.rowcount

        try:
            async with self.session_factory() as own_session:
                result = await own_session.execute(statement)
                await own_session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete images for project {project_id}: {e}")
            raise StorageError(f"Failed to delete images: {e}") from e

        logger.info(f"Deleted {result.rowcount} images for project {project_id}")
        return result.rowcount
