"""Project schemas"""

from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectBase(BaseModel):
    """Base project schema"""
    title: str = Field(..., min_length=1, max_length=255, description="Project title")
    description: str = Field(..., min_length=1, description="Project description")
    owner_name: str = Field(..., min_length=1, max_length=255, description="Owner name")
    location: str = Field(..., min_length=1, max_length=255, description="Project location")
    completion_date: Optional[date] = Field(None, description="Completion date (YYYY-MM-DD)")

    @field_validator("title", "description", "owner_name", "location")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values"""
        if not v.strip():
            raise ValueError("Field must not be empty")
        return v.strip()


class ProjectCreate(ProjectBase):
    """Project creation schema"""
    pass


class ProjectUpdate(ProjectBase):
    """Project update schema - full replacement of every field"""
    pass


class ProjectCreatedResponse(BaseModel):
    """Response for a created project"""
    id: int


class ProjectResponse(ProjectBase):
    """Project response schema"""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectWithImages(ProjectResponse):
    """Project response annotated with its image URLs"""
    images: List[str] = Field(default_factory=list, description="Image URLs in upload order")

    @classmethod
    def from_project(cls, project, images: List[str]) -> "ProjectWithImages":
        """Build from an ORM project and its image URLs"""
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            owner_name=project.owner_name,
            location=project.location,
            completion_date=project.completion_date,
            created_at=project.created_at,
            updated_at=project.updated_at,
            images=images,
        )


class SuccessResponse(BaseModel):
    """Generic success flag response"""
    success: bool = True
