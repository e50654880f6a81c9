"""API schemas package"""

from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectCreatedResponse,
    ProjectResponse,
    ProjectWithImages,
    SuccessResponse,
)
from .image import (
    BatchStatus,
    ImagePayload,
    ImageResponse,
    ImageUploadFailure,
    ImageUploadResponse,
    UploadedImage,
    UploadStatus,
)
from .booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingResponse,
)

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectCreatedResponse",
    "ProjectResponse",
    "ProjectWithImages",
    "SuccessResponse",
    "BatchStatus",
    "ImagePayload",
    "ImageResponse",
    "ImageUploadFailure",
    "ImageUploadResponse",
    "UploadedImage",
    "UploadStatus",
    "BookingCreate",
    "BookingCreatedResponse",
    "BookingResponse",
]
