"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_task_service, get_user_project
from src.database import get_db
from src.models.task import Task
from src.models.user import User
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from src.services.task import TaskService

router = APIRouter(prefix="/api/v1", tags=["tasks"])


def get_user_task(db: Session, task_id: int, user: User) -> Task:
    """Get a task from a project the user owns."""
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")

    get_user_project(db, task.project_id, user)

    return task


def validate_task_references(
    tasks: TaskService, project_id: int, column_id: int | None, category_id: int | None
) -> None:
    """Column and category must belong to the task project."""
    if column_id is not None and not tasks.is_valid_column(project_id, column_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This column doesn't belong to the project",
        )

    if category_id is not None and not tasks.is_valid_category(project_id, category_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This category doesn't belong to the project",
        )


@router.get("/projects/{project_id}/tasks", response_model=list[TaskResponse])
def get_tasks(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get all tasks of a project."""
    get_user_project(db, project_id, current_user)
    return tasks.get_all(project_id)


@router.post(
    "/projects/{project_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    project_id: int,
    task_data: TaskCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a task, in the first column unless one is given."""
    get_user_project(db, project_id, current_user)
    validate_task_references(tasks, project_id, task_data.column_id, task_data.category_id)

    task = tasks.create(
        project_id,
        task_data.title,
        column_id=task_data.column_id,
        category_id=task_data.category_id,
        description=task_data.description,
    )
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create your task",
        )

    return task


@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Update a task."""
    task = get_user_task(db, task_id, current_user)
    validate_task_references(tasks, task.project_id, task_data.column_id, task_data.category_id)

    if not tasks.update(task, task_data.model_dump(exclude_unset=True, exclude_none=True)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to update your task",
        )

    return task
