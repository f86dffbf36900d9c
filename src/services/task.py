"""Task service."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.category import NO_CATEGORY
from src.models.task import Task
from src.services.category import CategoryService
from src.services.column import ColumnService

logger = logging.getLogger(__name__)


class TaskService:
    """Service for creating and updating tasks."""

    def __init__(self, db: Session):
        self.db = db
        self.columns = ColumnService(db)
        self.categories = CategoryService(db)

    def get_by_id(self, task_id: int) -> Task | None:
        """Get a task by id."""
        return self.db.query(Task).filter(Task.id == task_id).first()

    def get_all(self, project_id: int) -> list[Task]:
        """Tasks of a project in board order."""
        return (
            self.db.query(Task)
            .filter(Task.project_id == project_id)
            .order_by(Task.column_id.asc(), Task.position.asc())
            .all()
        )

    def is_valid_category(self, project_id: int, category_id: int) -> bool:
        """A task category must be "No category" or belong to the task project."""
        return category_id == NO_CATEGORY or self.categories.exists(category_id, project_id)

    def is_valid_column(self, project_id: int, column_id: int) -> bool:
        column = self.columns.get_by_id(column_id)
        return column is not None and column.project_id == project_id

    def create(
        self,
        project_id: int,
        title: str,
        column_id: int | None = None,
        category_id: int = NO_CATEGORY,
        description: str | None = None,
    ) -> Task | None:
        """Create a task at the bottom of a column (first column by default)."""
        if column_id is None:
            column_id = self.columns.get_first_column_id(project_id)

        if column_id is None:
            logger.warning(f"Project {project_id} has no column, task {title!r} not created")
            return None

        last = (
            self.db.query(func.max(Task.position))
            .filter(Task.project_id == project_id, Task.column_id == column_id)
            .scalar()
        )

        task = Task(
            project_id=project_id,
            column_id=column_id,
            category_id=category_id,
            title=title,
            description=description,
            position=(last or 0) + 1,
        )
        self.db.add(task)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to create task {title!r}: {e}")
            self.db.rollback()
            return None

        self.db.refresh(task)
        return task

    def update(self, task: Task, values: dict[str, Any]) -> bool:
        """Apply field changes to a task."""
        for key, value in values.items():
            setattr(task, key, value)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to update task {task.id}: {e}")
            self.db.rollback()
            return False

        self.db.refresh(task)
        return True
