"""Board column management pages (HTML)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.api.dependencies import (
    get_column_service,
    get_current_user,
    get_project_column,
    get_user_project,
)
from src.database import get_db
from src.models.user import User
from src.schemas.column import ColumnForm, ColumnMove
from src.services.column import ColumnService
from src.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects/{project_id}/columns", tags=["board"])

FormField = Annotated[str, Form()]


def _form_errors(exc: ValidationError) -> dict[str, str]:
    return {str(error["loc"][0]): error["msg"] for error in exc.errors()}


def _validate_form(title: str, task_limit: str, description: str) -> ColumnForm:
    return ColumnForm.model_validate(
        {"title": title, "task_limit": task_limit or 0, "description": description}
    )


def _redirect_to_index(request: Request, project_id: int) -> RedirectResponse:
    return RedirectResponse(
        request.url_for("column_index", project_id=project_id),
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.get("", response_class=HTMLResponse, name="column_index")
def column_index(
    request: Request,
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """List the board columns with links to manage them."""
    project = get_user_project(db, project_id, current_user)

    return templates.TemplateResponse(
        request,
        "column/index.html",
        {
            "title": f"Edit the board for {project.name}",
            "project": project,
            "columns": columns.get_all(project.id),
        },
    )


@router.get("/create", response_class=HTMLResponse, name="column_create")
def column_create(
    request: Request,
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Form to add a column."""
    project = get_user_project(db, project_id, current_user)

    return templates.TemplateResponse(
        request,
        "column/create.html",
        {"project": project, "values": {}, "errors": {}},
    )


@router.post("/create", response_class=HTMLResponse, name="column_save")
def column_save(
    request: Request,
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
    title: FormField = "",
    task_limit: FormField = "0",
    description: FormField = "",
):
    """Validate the form and add the column."""
    project = get_user_project(db, project_id, current_user)
    values = {"title": title, "task_limit": task_limit, "description": description}

    try:
        form = _validate_form(title, task_limit, description)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "column/create.html",
            {"project": project, "values": values, "errors": _form_errors(e)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if not columns.create(project.id, form.title, form.task_limit, form.description):
        return templates.TemplateResponse(
            request,
            "column/create.html",
            {"project": project, "values": values, "errors": {"title": "Unable to add this column"}},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return _redirect_to_index(request, project.id)


@router.get("/{column_id}/edit", response_class=HTMLResponse, name="column_edit")
def column_edit(
    request: Request,
    project_id: int,
    column_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Form to edit a column."""
    project = get_user_project(db, project_id, current_user)
    column = get_project_column(db, project, column_id)

    values = {
        "title": column.title,
        "task_limit": column.task_limit,
        "description": column.description,
    }

    return templates.TemplateResponse(
        request,
        "column/edit.html",
        {"project": project, "column": column, "values": values, "errors": {}},
    )


@router.post("/{column_id}/edit", response_class=HTMLResponse, name="column_update")
def column_update(
    request: Request,
    project_id: int,
    column_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
    title: FormField = "",
    task_limit: FormField = "0",
    description: FormField = "",
):
    """Validate the form and update the column."""
    project = get_user_project(db, project_id, current_user)
    column = get_project_column(db, project, column_id)
    values = {"title": title, "task_limit": task_limit, "description": description}

    try:
        form = _validate_form(title, task_limit, description)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "column/edit.html",
            {"project": project, "column": column, "values": values, "errors": _form_errors(e)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if not columns.update(column.id, form.title, form.task_limit, form.description):
        return templates.TemplateResponse(
            request,
            "column/edit.html",
            {
                "project": project,
                "column": column,
                "values": values,
                "errors": {"title": "Unable to update this column"},
            },
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return _redirect_to_index(request, project.id)


@router.get("/{column_id}/confirm", response_class=HTMLResponse, name="column_confirm")
def column_confirm(
    request: Request,
    project_id: int,
    column_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """Ask for confirmation before removing a column."""
    project = get_user_project(db, project_id, current_user)
    column = get_project_column(db, project, column_id)

    return templates.TemplateResponse(
        request,
        "column/remove.html",
        {"project": project, "column": column, "task_count": columns.get_task_count(column.id)},
    )


@router.post("/{column_id}/remove", name="column_remove")
def column_remove(
    request: Request,
    project_id: int,
    column_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """Remove an empty column."""
    project = get_user_project(db, project_id, current_user)
    column = get_project_column(db, project, column_id)

    if not columns.remove(column.id):
        return templates.TemplateResponse(
            request,
            "column/remove.html",
            {"project": project, "column": column, "task_count": columns.get_task_count(column.id)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    logger.info(f"User {current_user.id} removed column {column_id} from project {project.id}")
    return _redirect_to_index(request, project.id)


@router.post("/move", name="column_move")
async def column_move(
    request: Request,
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    columns: Annotated[ColumnService, Depends(get_column_service)],
):
    """Save the position of a column after a drag and drop."""
    project = get_user_project(db, project_id, current_user)

    try:
        move = ColumnMove.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access Forbidden") from None

    return {"result": columns.change_position(project.id, move.column_id, move.position)}
