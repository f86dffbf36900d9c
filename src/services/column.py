"""Board column service."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.models.column import BoardColumn
from src.models.task import Task

logger = logging.getLogger(__name__)


class ColumnService:
    """Service for the columns of a project board."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def get_by_id(self, column_id: int) -> BoardColumn | None:
        """Get a column by id."""
        return self.db.query(BoardColumn).filter(BoardColumn.id == column_id).first()

    def get_all(self, project_id: int) -> list[BoardColumn]:
        """Return the columns of a project ordered by position."""
        return (
            self.db.query(BoardColumn)
            .filter(BoardColumn.project_id == project_id)
            .order_by(BoardColumn.position.asc())
            .all()
        )

    def get_first_column_id(self, project_id: int) -> int | None:
        """Id of the leftmost column of a project."""
        return (
            self.db.query(BoardColumn.id)
            .filter(BoardColumn.project_id == project_id)
            .order_by(BoardColumn.position.asc())
            .limit(1)
            .scalar()
        )

    def get_task_count(self, column_id: int) -> int:
        """Number of tasks in a column."""
        return self.db.query(func.count(Task.id)).filter(Task.column_id == column_id).scalar()

    def _next_position(self, project_id: int) -> int:
        last = (
            self.db.query(func.max(BoardColumn.position))
            .filter(BoardColumn.project_id == project_id)
            .scalar()
        )
        return (last or 0) + 1

    def _add(
        self, project_id: int, title: str, task_limit: int = 0, description: str = ""
    ) -> BoardColumn:
        column = BoardColumn(
            project_id=project_id,
            title=title,
            position=self._next_position(project_id),
            task_limit=task_limit,
            description=description,
        )
        self.db.add(column)
        self.db.flush()
        return column

    def create(
        self,
        project_id: int,
        title: str,
        task_limit: int = 0,
        description: str = "",
    ) -> int | bool:
        """Append a column to the board, return its id or False on failure."""
        try:
            column = self._add(project_id, title, task_limit, description)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to create column {title!r} in project {project_id}: {e}")
            self.db.rollback()
            return False

        return column.id

    def update(
        self, column_id: int, title: str, task_limit: int = 0, description: str = ""
    ) -> bool:
        """Update the editable fields of a column."""
        try:
            updated = (
                self.db.query(BoardColumn)
                .filter(BoardColumn.id == column_id)
                .update(
                    {"title": title, "task_limit": task_limit, "description": description},
                    synchronize_session="fetch",
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to update column {column_id}: {e}")
            self.db.rollback()
            return False

        return updated > 0

    def remove(self, column_id: int) -> bool:
        """Remove an empty column and re-pack the remaining positions."""
        column = self.get_by_id(column_id)

        if column is None:
            return False

        if self.get_task_count(column_id) > 0:
            logger.warning(f"Column {column_id} still has tasks, not removed")
            return False

        project_id = column.project_id

        try:
            self.db.delete(column)
            self.db.flush()

            for position, remaining in enumerate(self.get_all(project_id), start=1):
                remaining.position = position

            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to remove column {column_id}: {e}")
            self.db.rollback()
            return False

        return True

    def change_position(self, project_id: int, column_id: int, position: int) -> bool:
        """Move a column to a 1-based position, shifting the others."""
        columns = self.get_all(project_id)

        if position < 1 or position > len(columns):
            return False

        moved = next((column for column in columns if column.id == column_id), None)

        if moved is None:
            return False

        offset = 1

        for column in columns:
            if column.id == column_id:
                continue

            if offset == position:
                offset += 1

            column.position = offset
            offset += 1

        moved.position = position

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to move column {column_id} to position {position}: {e}")
            self.db.rollback()
            return False

        return True

    def create_default_columns(self, project_id: int) -> None:
        """Create the configured board columns for a new project (no commit)."""
        for title in self.settings.default_columns:
            self._add(project_id, title)

    def duplicate(self, src_project_id: int, dst_project_id: int) -> bool:
        """Copy the columns of a project into another one (no commit)."""
        for column in self.get_all(src_project_id):
            self.db.add(
                BoardColumn(
                    project_id=dst_project_id,
                    title=column.title,
                    position=column.position,
                    task_limit=column.task_limit,
                    description=column.description,
                )
            )

        try:
            self.db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Unable to copy columns to project {dst_project_id}: {e}")
            return False

        return True
