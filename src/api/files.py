"""Task attachment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_file_service
from src.api.tasks import get_user_task
from src.database import get_db
from src.models.user import User
from src.schemas.file import TaskFileResponse
from src.services.file import FileService

router = APIRouter(prefix="/api/v1", tags=["files"])


@router.get("/tasks/{task_id}/files", response_model=list[TaskFileResponse])
def get_task_files(
    task_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """List the files attached to a task."""
    get_user_task(db, task_id, current_user)
    return files.get_all(task_id)


@router.post(
    "/tasks/{task_id}/files",
    response_model=TaskFileResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_task_file(
    task_id: int,
    upload: UploadFile,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Attach an uploaded file to a task."""
    get_user_task(db, task_id, current_user)

    if not upload.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    data = await upload.read()
    task_file = files.create(task_id, current_user.id, upload.filename, data)

    if task_file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to upload the file",
        )

    return task_file


@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_file(
    file_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Remove an attachment and its stored content."""
    task_file = files.get_by_id(file_id)
    if task_file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    get_user_task(db, task_file.task_id, current_user)

    if not files.remove(file_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to remove this file",
        )
