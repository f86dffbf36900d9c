"""Category service: data access for project categories."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.models.category import NO_CATEGORY, Category
from src.models.task import Task

logger = logging.getLogger(__name__)

ALL_CATEGORIES = -1


class CategoryService:
    """Service for project categories (table project_has_categories)."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def exists(self, category_id: int, project_id: int) -> bool:
        """Return True if the category exists and belongs to the project."""
        query = self.db.query(Category.id).filter(
            Category.id == category_id,
            Category.project_id == project_id,
        )
        return bool(self.db.query(query.exists()).scalar())

    def get_by_id(self, category_id: int) -> Category | None:
        """Get a category by id."""
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_name_by_id(self, category_id: int) -> str:
        """Get a category name by id, empty string if it doesn't exist."""
        name = self.db.query(Category.name).filter(Category.id == category_id).scalar()
        return name or ""

    def get_id_by_name(self, project_id: int, category_name: str) -> int:
        """Get a category id by name within a project, 0 if it doesn't exist."""
        category_id = (
            self.db.query(Category.id)
            .filter(Category.project_id == project_id, Category.name == category_name)
            .scalar()
        )
        return int(category_id or 0)

    def get_list(
        self,
        project_id: int,
        prepend_none: bool = True,
        prepend_all: bool = False,
    ) -> dict[int, str]:
        """Return an id -> name mapping of the project categories, sorted by name.

        The pseudo entries "All categories" (-1) and "No category" (0) are
        placed before the real categories when requested.
        """
        rows = (
            self.db.query(Category.id, Category.name)
            .filter(Category.project_id == project_id)
            .order_by(Category.name.asc())
            .all()
        )

        listing: dict[int, str] = {}

        if prepend_all:
            listing[ALL_CATEGORIES] = "All categories"

        if prepend_none:
            listing[NO_CATEGORY] = "No category"

        listing.update((category_id, name) for category_id, name in rows)
        return listing

    def get_all(self, project_id: int) -> list[Category]:
        """Return all categories of a project, sorted by name."""
        return (
            self.db.query(Category)
            .filter(Category.project_id == project_id)
            .order_by(Category.name.asc())
            .all()
        )

    def create_default_categories(self, project_id: int) -> None:
        """Insert the configured default categories for a new project.

        Must be called inside the project creation transaction, nothing is
        committed here. Repeated names are only inserted once.
        """
        seen: set[str] = set()

        for name in self.settings.default_categories:
            if name in seen:
                continue

            seen.add(name)
            self.db.add(Category(project_id=project_id, name=name))

        self.db.flush()

    def create(self, values: dict[str, Any]) -> int | bool:
        """Create a category, return its id or False on failure."""
        category = Category(**values)
        self.db.add(category)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to create category {values.get('name')!r}: {e}")
            self.db.rollback()
            return False

        return category.id

    def update(self, values: dict[str, Any]) -> bool:
        """Replace the row identified by values["id"]."""
        changes = {key: value for key, value in values.items() if key != "id"}

        try:
            updated = (
                self.db.query(Category)
                .filter(Category.id == values["id"])
                .update(changes, synchronize_session="fetch")
            )
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to update category {values['id']}: {e}")
            self.db.rollback()
            return False

        return updated > 0

    def remove(self, category_id: int) -> bool:
        """Remove a category, tasks using it are moved to "No category".

        Both statements run in one transaction: if the category can't be
        deleted, the task reassignment is rolled back as well.
        """
        try:
            self.db.query(Task).filter(Task.category_id == category_id).update(
                {Task.category_id: NO_CATEGORY}, synchronize_session="fetch"
            )

            deleted = (
                self.db.query(Category)
                .filter(Category.id == category_id)
                .delete(synchronize_session="fetch")
            )
        except SQLAlchemyError as e:
            logger.error(f"Unable to remove category {category_id}: {e}")
            self.db.rollback()
            return False

        if not deleted:
            logger.warning(f"Category {category_id} not found, reassignment rolled back")
            self.db.rollback()
            return False

        self.db.commit()
        return True

    def duplicate(self, src_project_id: int, dst_project_id: int) -> bool:
        """Copy the categories of a project into another one.

        Must be called inside a transaction, nothing is committed here.
        """
        names = (
            self.db.query(Category.name)
            .filter(Category.project_id == src_project_id)
            .order_by(Category.name.asc())
            .all()
        )

        for (name,) in names:
            self.db.add(Category(project_id=dst_project_id, name=name))

            try:
                self.db.flush()
            except SQLAlchemyError as e:
                logger.error(f"Unable to copy category {name!r} into project {dst_project_id}: {e}")
                return False

        return True
