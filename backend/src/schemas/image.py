"""Image schemas"""

from enum import Enum
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UploadStatus(str, Enum):
    """Outcome of a single file in an upload batch"""
    UPLOADED = "uploaded"
    UPLOAD_FAILED = "upload_failed"
    PERSIST_FAILED = "persist_failed"


class BatchStatus(str, Enum):
    """Outcome of a whole upload batch"""
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"
    REJECTED = "rejected"


class ImagePayload(BaseModel):
    """One file from a multipart upload request"""
    filename: Optional[str] = Field(None, description="Original file name")
    content_type: Optional[str] = Field(None, description="MIME type sent by the client")
    data: bytes = Field(..., description="File contents")


class UploadedImage(BaseModel):
    """A file that was uploaded and stored"""
    index: int = Field(..., description="Zero-based position of the file in the request")
    url: str = Field(..., description="Public URL of the stored image")


class ImageUploadFailure(BaseModel):
    """A file that could not be uploaded or stored"""
    index: int = Field(..., description="Zero-based position of the file in the request")
    filename: Optional[str] = Field(None, description="Original file name")
    error: UploadStatus = Field(..., description="upload_failed or persist_failed")
    detail: str = Field(..., description="Reason for the failure")


class ImageUploadResponse(BaseModel):
    """Aggregated result of an upload batch"""
    success: bool = Field(..., description="True when every file was stored")
    status: BatchStatus
    images: List[str] = Field(default_factory=list, description="Stored URLs in request order")
    uploaded: List[UploadedImage] = Field(default_factory=list)
    failures: Optional[List[ImageUploadFailure]] = Field(
        None, description="Per-file failures; omitted when every file succeeded"
    )


class ImageResponse(BaseModel):
    """Stored image record"""
    id: int
    project_id: int
    image_url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
