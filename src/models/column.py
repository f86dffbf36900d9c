"""Board column model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base


class BoardColumn(Base):
    """Board column of a project. Positions are 1-based within a project."""

    __tablename__ = "columns"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=1)
    task_limit = Column(Integer, nullable=False, default=0)  # 0 = unlimited
    description = Column(Text, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="columns")
    tasks = relationship("Task", back_populates="column")
