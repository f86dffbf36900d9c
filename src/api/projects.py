"""Project API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_project_service, get_user_project
from src.database import get_db
from src.models.user import User
from src.schemas.project import ProjectCreate, ProjectResponse
from src.services.project import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
def get_projects(
    current_user: Annotated[User, Depends(get_current_user)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Get all projects owned by the current user."""
    return projects.get_all_for_user(current_user.id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Create a project with the default board columns and categories."""
    project = projects.create(current_user.id, project_data.name, project_data.description)

    if project is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create this project",
        )

    return project


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific project."""
    return get_user_project(db, project_id, current_user)


@router.post(
    "/{project_id}/duplicate",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_project(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Clone a project with its columns and categories."""
    get_user_project(db, project_id, current_user)

    clone = projects.duplicate(project_id, current_user.id)

    if clone is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to clone this project",
        )

    return clone
