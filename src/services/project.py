"""Project service."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.models.project import Project
from src.services.category import CategoryService
from src.services.column import ColumnService

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project creation and duplication."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()
        self.columns = ColumnService(db, self.settings)
        self.categories = CategoryService(db, self.settings)

    def get_by_id(self, project_id: int) -> Project | None:
        """Get a project by id."""
        return self.db.query(Project).filter(Project.id == project_id).first()

    def get_all_for_user(self, user_id: int) -> list[Project]:
        """Projects owned by a user, sorted by name."""
        return (
            self.db.query(Project)
            .filter(Project.owner_id == user_id)
            .order_by(Project.name.asc())
            .all()
        )

    def create(self, owner_id: int, name: str, description: str | None = None) -> Project | None:
        """Create a project with its default columns and categories.

        Everything is inserted in one transaction.
        """
        try:
            project = Project(name=name, description=description, owner_id=owner_id)
            self.db.add(project)
            self.db.flush()

            self.columns.create_default_columns(project.id)
            self.categories.create_default_categories(project.id)

            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to create project {name!r}: {e}")
            self.db.rollback()
            return None

        self.db.refresh(project)
        logger.info(f"Created project {project.id} ({name!r}) for user {owner_id}")
        return project

    def duplicate(self, project_id: int, owner_id: int) -> Project | None:
        """Clone a project with its columns and categories (tasks are not copied)."""
        source = self.get_by_id(project_id)

        if source is None:
            return None

        try:
            clone = Project(
                name=f"{source.name} (Clone)",
                description=source.description,
                owner_id=owner_id,
            )
            self.db.add(clone)
            self.db.flush()

            copied = self.columns.duplicate(source.id, clone.id) and self.categories.duplicate(
                source.id, clone.id
            )
        except SQLAlchemyError as e:
            logger.error(f"Unable to duplicate project {project_id}: {e}")
            self.db.rollback()
            return None

        if not copied:
            self.db.rollback()
            return None

        self.db.commit()
        self.db.refresh(clone)
        return clone
