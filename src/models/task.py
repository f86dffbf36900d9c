"""Task model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.category import NO_CATEGORY
from src.models.mixins import ModificationDateMixin


class Task(Base, ModificationDateMixin):
    """Task model, a card on the board."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    column_id = Column(Integer, ForeignKey("columns.id"), nullable=False, index=True)
    # Not a foreign key: 0 means "no category"
    category_id = Column(Integer, nullable=False, default=NO_CATEGORY, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=1)

    # Relationships
    project = relationship("Project", back_populates="tasks")
    column = relationship("BoardColumn", back_populates="tasks")
    files = relationship("TaskFile", back_populates="task", cascade="all, delete-orphan")
