"""Board column API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_column_service, get_current_user, get_user_project
from src.database import get_db
from src.models.user import User
from src.schemas.column import ColumnForm, ColumnResponse
from src.services.column import ColumnService

router = APIRouter(prefix="/api/v1/projects/{project_id}/columns", tags=["columns"])


@router.get("", response_model=list[ColumnResponse])
def get_columns(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """Get the board columns of a project, left to right."""
    get_user_project(db, project_id, current_user)
    return columns.get_all(project_id)


@router.post("", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
def create_column(
    project_id: int,
    column_data: ColumnForm,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """Append a column to the board."""
    get_user_project(db, project_id, current_user)

    column_id = columns.create(
        project_id, column_data.title, column_data.task_limit, column_data.description
    )
    if not column_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to add this column",
        )

    return columns.get_by_id(column_id)
