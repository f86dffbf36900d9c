"""File viewer pages (HTML)."""

import mimetypes
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import FileResponse, HTMLResponse
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user, get_file_service, get_user_project
from src.database import get_db
from src.models.file import TaskFile
from src.models.user import User
from src.services.file import FileService, get_preview_type
from src.templating import templates

router = APIRouter(prefix="/projects/{project_id}/files", tags=["files"])


def get_project_file(
    db: Session, files: FileService, project_id: int, file_id: int, user: User
) -> TaskFile:
    """Get a file attached to a task of a project the user owns."""
    project = get_user_project(db, project_id, user)
    task_file = files.get_by_id(file_id)

    if task_file is None or task_file.task.project_id != project.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    return task_file


@router.get("/{file_id}", response_class=HTMLResponse, name="file_viewer_show")
def show(
    request: Request,
    project_id: int,
    file_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Display an image, a markdown document or a text file."""
    task_file = get_project_file(db, files, project_id, file_id, current_user)
    preview_type = get_preview_type(task_file.name)
    content = ""

    if not task_file.is_image and preview_type is not None:
        content = files.get_content(task_file)

    return templates.TemplateResponse(
        request,
        "file_viewer/show.html",
        {
            "title": task_file.name,
            "file": task_file,
            "params": {"project_id": project_id, "file_id": task_file.id},
            "content": content,
            "type": preview_type,
        },
    )


@router.get("/{file_id}/image", name="file_viewer_image")
def image(
    project_id: int,
    file_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    files: Annotated[FileService, Depends(get_file_service)],
):
    """Serve the raw content of an image attachment."""
    task_file = get_project_file(db, files, project_id, file_id, current_user)
    path = files.storage.path(task_file.path)

    if not task_file.is_image or not path.exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")

    media_type, _ = mimetypes.guess_type(task_file.name)
    return FileResponse(path, media_type=media_type or "application/octet-stream")
