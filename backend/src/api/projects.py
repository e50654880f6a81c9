"""Project management endpoints"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, status

from src.api.dependencies import (
    get_project_query_service,
    get_project_repository,
    get_upload_orchestrator,
)
from src.api.errors import (
    internal_server_error,
    not_found_error,
    quota_exceeded_error,
    validation_error,
)
from src.schemas.image import ImagePayload, ImageUploadResponse
from src.schemas.project import (
    ProjectCreate,
    ProjectCreatedResponse,
    ProjectUpdate,
    ProjectWithImages,
    SuccessResponse,
)
from src.services.errors import (
    InputValidationError,
    NotFoundError,
    QuotaExceededError,
    StorageError,
)
from src.services.project_query_service import ProjectQueryService
from src.services.project_repository import ProjectRepository
from src.services.upload_orchestrator import UploadOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.post("", response_model=ProjectCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    request: Request,
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Create a project"""
    try:
        project_id = await repository.create(project.model_dump())
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    return ProjectCreatedResponse(id=project_id)


@router.get("", response_model=List[ProjectWithImages], status_code=status.HTTP_200_OK)
async def list_projects(
    request: Request,
    queries: ProjectQueryService = Depends(get_project_query_service),
):
    """
    Get all projects, newest first

    Each project includes its image URLs
    """
    try:
        return await queries.list_projects()
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)


@router.get("/search", response_model=List[ProjectWithImages], status_code=status.HTTP_200_OK)
async def search_projects(
    request: Request,
    owner: Optional[str] = Query(None, description="Substring of the owner name"),
    location: Optional[str] = Query(None, description="Substring of the location"),
    queries: ProjectQueryService = Depends(get_project_query_service),
):
    """
    Search projects by owner name and location

    Matching is case-insensitive and by substring; both filters must match
    """
    try:
        return await queries.search_projects(owner=owner, location=location)
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)


@router.get("/{project_id}", response_model=ProjectWithImages, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: int,
    request: Request,
    queries: ProjectQueryService = Depends(get_project_query_service),
):
    """Get one project with its image URLs"""
    try:
        return await queries.get_project(project_id)
    except NotFoundError as e:
        return not_found_error(str(e), instance=request.url.path)
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)


@router.put("/{project_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
async def update_project(
    project_id: int,
    project: ProjectUpdate,
    request: Request,
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Replace every field of a project"""
    try:
        updated = await repository.update(project_id, project.model_dump())
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    if not updated:
        return not_found_error(
            f"Project with id {project_id} not found", instance=request.url.path
        )

    return SuccessResponse(success=True)


@router.delete("/{project_id}", response_model=SuccessResponse, status_code=status.HTTP_200_OK)
async def delete_project(
    project_id: int,
    request: Request,
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Delete a project together with all of its images"""
    try:
        deleted = await repository.delete(project_id)
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    if not deleted:
        return not_found_error(
            f"Project with id {project_id} not found", instance=request.url.path
        )

    return SuccessResponse(success=True)


@router.post(
    "/{project_id}/images",
    response_model=ImageUploadResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def upload_project_images(
    project_id: int,
    request: Request,
    images: Optional[List[UploadFile]] = File(None, description="Up to 5 image files"),
    orchestrator: UploadOrchestrator = Depends(get_upload_orchestrator),
):
    """
    Upload up to 5 images for a project.

    This endpoint:
    1. Rejects the request if no files were sent
    2. Verifies the project exists
    3. Rejects the whole batch if it would exceed the project's image limit
    4. Uploads every file concurrently and stores each successful URL
    5. Returns stored URLs plus any per-file failures

    Files that succeed stay stored even when other files in the batch fail.
    """
    payloads = []
    for upload in images or []:
        payloads.append(
            ImagePayload(
                filename=upload.filename,
                content_type=upload.content_type,
                data=await upload.read(),
            )
        )

    try:
        return await orchestrator.upload_batch(project_id, payloads)
    except InputValidationError as e:
        return validation_error(
            str(e),
            errors=[{"field": "images", "message": str(e)}],
            instance=request.url.path,
        )
    except NotFoundError as e:
        return not_found_error(str(e), instance=request.url.path)
    except QuotaExceededError as e:
        return quota_exceeded_error(
            str(e), remaining=e.remaining, limit=e.limit, instance=request.url.path
        )
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)
