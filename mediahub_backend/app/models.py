"""SQLAlchemy models for MediaHub.

One row per stored file. ``file_name`` is the generated storage name and the
key used by delete; uses the declarative base from ``app.database``.
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from .database import Base


class Upload(Base):
    __tablename__ = "uploads"

    id = Column(Integer, primary_key=True, index=True)
    file_name = Column(String(255), nullable=False, index=True)
    file_path = Column(String(1024), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Upload id={self.id} file_name={self.file_name!r}>"
