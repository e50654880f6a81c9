"""Base model with common fields for all database models"""

from datetime import datetime
from sqlalchemy import Column, DateTime, Integer
from src.database import Base


class BaseModel(Base):
    """Abstract base model with common fields"""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
