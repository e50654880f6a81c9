"""Read-side aggregation of projects with their image URLs"""

import asyncio
import logging
from typing import List, Optional

from src.models.project import Project
from src.schemas.project import ProjectWithImages
from src.services.errors import NotFoundError
from src.services.image_repository import ImageRepository
from src.services.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectQueryService:
    """
    Composes project rows with their image URLs for list/get/search.

    Any storage fault while loading images fails the whole request.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        image_repository: ImageRepository,
    ):
        self.project_repository = project_repository
        self.image_repository = image_repository

    async def list_projects(self) -> List[ProjectWithImages]:
        """All projects, newest first, each with its images"""
        projects = await self.project_repository.list_projects()
        return await self._with_images(projects)

    async def get_project(self, project_id: int) -> ProjectWithImages:
        """
        One project with its images.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.project_repository.get(project_id)
        if project is None:
            raise NotFoundError(f"Project with id {project_id} not found")

        images = await self.image_repository.list_image_urls(project_id)
        return ProjectWithImages.from_project(project, images)

    async def search_projects(
        self, owner: Optional[str] = None, location: Optional[str] = None
    ) -> List[ProjectWithImages]:
        """Projects whose owner and location contain the given filters"""
        projects = await self.project_repository.search(owner=owner, location=location)
        logger.debug(
            f"Search owner={owner!r} location={location!r} matched {len(projects)} projects"
        )
        return await self._with_images(projects)

    async def _with_images(self, projects: List[Project]) -> List[ProjectWithImages]:
        image_lists = await asyncio.gather(
            *(self.image_repository.list_image_urls(project.id) for project in projects)
        )
        return [
            ProjectWithImages.from_project(project, images)
            for project, images in zip(projects, image_lists)
        ]
