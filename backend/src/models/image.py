"""Image model"""

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from src.models.base import BaseModel


class Image(BaseModel):
    """
    Image attached to a project.
    The URL points at the object store and never changes once written.
    """

    __tablename__ = "images"

    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_url = Column(Text, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="images")

    def __repr__(self):
        return f"<Image(id={self.id}, project_id={self.project_id})>"
