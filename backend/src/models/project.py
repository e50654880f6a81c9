"""Project model"""

from datetime import datetime
from sqlalchemy import Column, Date, DateTime, String, Text
from sqlalchemy.orm import relationship
from src.models.base import BaseModel


class Project(BaseModel):
    """
    Project model representing a completed or ongoing build in the portfolio.
    Projects own up to a fixed number of images.
    """

    __tablename__ = "projects"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    owner_name = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=False, index=True)
    completion_date = Column(Date, nullable=True)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    images = relationship(
        "Image",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Image.id",
    )

    def __repr__(self):
        return f"<Project(id={self.id}, title={self.title}, owner={self.owner_name})>"
