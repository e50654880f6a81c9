"""Project repository: CRUD and search over project records"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.models.project import Project
from src.services.errors import StorageError
from src.services.image_repository import ImageRepository

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ("title", "description", "owner_name", "location", "completion_date")


def _project_values(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only writable project columns; missing completion_date means NULL"""
    return {name: fields.get(name) for name in PROJECT_FIELDS}


class ProjectRepository:
    """Repository for project records"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        image_repository: ImageRepository,
    ):
        """
        Initialize repository.

        Args:
            session_factory: Shared session factory
            image_repository: Used to cascade image deletion
        """
        self.session_factory = session_factory
        self.image_repository = image_repository

    async def create(self, fields: Dict[str, Any]) -> int:
        """
        Insert a project and return its generated ID.

        Required fields are checked by the API layer before this call.
        """
        project = Project(**_project_values(fields))
        try:
            async with self.session_factory() as session:
                session.add(project)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create project: {e}")
            raise StorageError(f"Failed to create project: {e}") from e

        logger.info(f"Created project {project.id}")
        return project.id

    async def get(self, project_id: int) -> Optional[Project]:
        """Fetch a project by ID, or None if it does not exist"""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Project).where(Project.id == project_id)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load project {project_id}: {e}")
            raise StorageError(f"Failed to load project: {e}") from e

    async def list_projects(self) -> List[Project]:
        """All projects, newest first"""
        return await self._fetch(
            select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        )

    async def search(
        self, owner: Optional[str] = None, location: Optional[str] = None
    ) -> List[Project]:
        """
        Case-insensitive substring search on owner name and location.

        Empty filters match everything; both filters must match.
        """
        query = select(Project)
        if owner:
            query = query.where(Project.owner_name.icontains(owner, autoescape=True))
        if location:
            query = query.where(Project.location.icontains(location, autoescape=True))

        return await self._fetch(
            query.order_by(Project.created_at.desc(), Project.id.desc())
        )

    async def update(self, project_id: int, fields: Dict[str, Any]) -> bool:
        """
        Replace every writable field of a project.

        Returns:
            True if a row was updated, False if the project does not exist
        """
        values = _project_values(fields)
        values["updated_at"] = datetime.utcnow()

        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    update(Project).where(Project.id == project_id).values(**values)
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update project {project_id}: {e}")
            raise StorageError(f"Failed to update project: {e}") from e

        updated = result.rowcount > 0
        if updated:
            logger.info(f"Updated project {project_id}")
        return updated

    async def delete(self, project_id: int) -> bool:
        """
        Delete a project and all of its images in one transaction.

        Any failure rolls back both deletions.

        Returns:
            True if the project was deleted, False if it did not exist

        Raises:
            StorageError: If either deletion fails
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    project = await session.get(Project, project_id)
                    if project is None:
                        return False

                    removed = await self.image_repository.delete_all_for_project(
                        project_id, session=session
                    )
                    await session.delete(project)
        except StorageError:
            logger.error(f"Rolled back deletion of project {project_id}")
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise StorageError(f"Failed to delete project: {e}") from e

        logger.info(f"Deleted project {project_id} and {removed} images")
        return True

    async def _fetch(self, query) -> List[Project]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to query projects: {e}")
            raise StorageError(f"Failed to query projects: {e}") from e
