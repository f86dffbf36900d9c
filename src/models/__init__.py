"""SQLAlchemy models."""

from src.models.category import NO_CATEGORY, Category
from src.models.column import BoardColumn
from src.models.file import TaskFile
from src.models.project import Project
from src.models.task import Task
from src.models.user import User

__all__ = [
    "NO_CATEGORY",
    "User",
    "Project",
    "BoardColumn",
    "Category",
    "Task",
    "TaskFile",
]
