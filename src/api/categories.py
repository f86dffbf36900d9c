"""Category API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_category_service, get_current_user, get_user_project
from src.database import get_db
from src.models.category import Category
from src.models.user import User
from src.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from src.services.category import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["categories"])


def get_category(db: Session, category_id: int, user: User) -> Category:
    """Get a category that belongs to a project the user owns."""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    get_user_project(db, category.project_id, user)

    return category


def ensure_unique_name(
    categories: CategoryService, project_id: int, name: str, category_id: int | None = None
) -> None:
    """Reject a name already used by another category of the project."""
    existing_id = categories.get_id_by_name(project_id, name)
    if existing_id and existing_id != category_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This category already exists",
        )


@router.get("/projects/{project_id}/categories", response_model=list[CategoryResponse])
def get_categories(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Get all categories of a project, sorted by name."""
    get_user_project(db, project_id, current_user)
    return categories.get_all(project_id)


@router.get("/projects/{project_id}/categories/options", response_model=dict[int, str])
def get_category_options(
    project_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
    prepend_none: bool = True,
    prepend_all: bool = False,
):
    """Get the id -> name choices used by category dropdowns and filters."""
    get_user_project(db, project_id, current_user)
    return categories.get_list(project_id, prepend_none=prepend_none, prepend_all=prepend_all)


@router.post(
    "/projects/{project_id}/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    project_id: int,
    category_data: CategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Create a new category in a project."""
    get_user_project(db, project_id, current_user)
    ensure_unique_name(categories, project_id, category_data.name)

    category_id = categories.create({"project_id": project_id, "name": category_data.name})
    if not category_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to create this category",
        )

    return categories.get_by_id(category_id)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category_by_id(
    category_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a category."""
    return get_category(db, category_id, current_user)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Update a category."""
    category = get_category(db, category_id, current_user)
    ensure_unique_name(categories, category.project_id, category_data.name, category.id)

    values = {"id": category.id, "project_id": category.project_id, "name": category_data.name}
    if not categories.update(values):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to update this category",
        )

    return categories.get_by_id(category.id)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete a category. Its tasks are moved to "No category"."""
    get_category(db, category_id, current_user)

    if not categories.remove(category_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to remove this category",
        )

    logger.info(f"User {current_user.id} removed category {category_id}")
