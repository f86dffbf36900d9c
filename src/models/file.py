"""Task attachment model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreationDateMixin


class TaskFile(Base, CreationDateMixin):
    """File attached to a task. The blob itself lives in file storage."""

    __tablename__ = "task_has_files"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    path = Column(String(255), nullable=False)  # relative to settings.files_path
    is_image = Column(Boolean, default=False, nullable=False)
    size = Column(Integer, default=0, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    task = relationship("Task", back_populates="files")
    user = relationship("User")
