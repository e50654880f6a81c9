"""Image listing endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Request, status

from src.api.dependencies import get_image_repository
from src.api.errors import internal_server_error
from src.schemas.image import ImageResponse
from src.services.errors import StorageError
from src.services.image_repository import ImageRepository

router = APIRouter(prefix="/api/images", tags=["Images"])


@router.get("", response_model=List[ImageResponse], status_code=status.HTTP_200_OK)
async def list_images(
    request: Request,
    repository: ImageRepository = Depends(get_image_repository),
):
    """Get every stored image, newest first"""
    try:
        images = await repository.list_images()
    except StorageError as e:
        return internal_server_error(str(e), instance=request.url.path)

    return [ImageResponse.model_validate(image) for image in images]
