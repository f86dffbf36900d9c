"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.models.column import BoardColumn
from src.models.project import Project
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.category import CategoryService
from src.services.column import ColumnService
from src.services.file import FileService, FileStorage
from src.services.project import ProjectService
from src.services.task import TaskService

security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"  # noqa: S105


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    access_token: Annotated[str | None, Cookie()] = None,
) -> User:
    """Get the current user from the Bearer token or the session cookie."""
    token = credentials.credentials if credentials else access_token
    if not token:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(token)
    if payload is None or payload.get("sub") is None:
        raise _unauthorized("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if user is None:
        raise _unauthorized("User not found")

    return user


def get_user_project(db: Session, project_id: int, user: User) -> Project:
    """Get a project owned by the user."""
    project = (
        db.query(Project).filter(Project.id == project_id, Project.owner_id == user.id).first()
    )
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def get_project_column(db: Session, project: Project, column_id: int) -> BoardColumn:
    """Get a column that belongs to the project."""
    column = (
        db.query(BoardColumn)
        .filter(BoardColumn.id == column_id, BoardColumn.project_id == project.id)
        .first()
    )
    if column is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Column not found")
    return column


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CategoryService:
    """Get category service instance."""
    return CategoryService(db, settings)


def get_column_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ColumnService:
    """Get column service instance."""
    return ColumnService(db, settings)


def get_project_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProjectService:
    """Get project service with its column and category services."""
    return ProjectService(db, settings)


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service instance."""
    return TaskService(db)


def get_file_storage(
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileStorage:
    """Get the attachment storage."""
    return FileStorage(settings.files_path)


def get_file_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[FileStorage, Depends(get_file_storage)],
) -> FileService:
    """Get file service instance."""
    return FileService(db, storage)
