"""Category model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base

# Value of tasks.category_id for tasks without a category
NO_CATEGORY = 0


class Category(Base):
    """Task category, scoped to a single project.

    Names are unique per project, checked by the application with a
    lookup by name before inserting or renaming.
    """

    __tablename__ = "project_has_categories"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="categories")
