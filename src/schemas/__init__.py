"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from src.schemas.column import ColumnForm, ColumnMove, ColumnResponse
from src.schemas.file import TaskFileResponse
from src.schemas.project import ProjectCreate, ProjectResponse
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "ProjectCreate",
    "ProjectResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "ColumnForm",
    "ColumnMove",
    "ColumnResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskFileResponse",
]
