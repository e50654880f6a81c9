"""Database models package"""

from src.models.base import BaseModel
from src.models.project import Project
from src.models.image import Image
from src.models.booking import Booking

# Export all models
__all__ = [
    "BaseModel",
    "Project",
    "Image",
    "Booking",
]
