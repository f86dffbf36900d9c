"""Task attachments: blob storage and file metadata."""

import logging
import os
import uuid
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.file import TaskFile

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif"}

PREVIEW_TYPES = {
    "md": "markdown",
    "markdown": "markdown",
    "txt": "text",
}


def get_extension(filename: str) -> str:
    """Lowercase extension without the dot."""
    return os.path.splitext(filename)[1].lstrip(".").lower()


def is_image(filename: str) -> bool:
    """Check if a file can be displayed inline as an image."""
    return get_extension(filename) in IMAGE_EXTENSIONS


def get_preview_type(filename: str) -> str | None:
    """Return "markdown", "text" or None when the file has no preview."""
    return PREVIEW_TYPES.get(get_extension(filename))


class FileStorage:
    """Filesystem object storage rooted at a directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise ValueError(f"Invalid storage key: {key}")
        return path

    def path(self, key: str) -> Path:
        """Absolute path of a stored object."""
        return self._resolve(key)

    def put(self, key: str, data: bytes) -> None:
        path = self._resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def get(self, key: str) -> bytes:
        return self._resolve(key).read_bytes()

    def remove(self, key: str) -> bool:
        path = self._resolve(key)
        if not path.exists():
            return False
        path.unlink()
        return True


class FileService:
    """Service for files attached to tasks."""

    def __init__(self, db: Session, storage: FileStorage):
        self.db = db
        self.storage = storage

    def get_by_id(self, file_id: int) -> TaskFile | None:
        """Get a file by id."""
        return self.db.query(TaskFile).filter(TaskFile.id == file_id).first()

    def get_all(self, task_id: int) -> list[TaskFile]:
        """Files of a task, images last, then by name."""
        return (
            self.db.query(TaskFile)
            .filter(TaskFile.task_id == task_id)
            .order_by(TaskFile.is_image.asc(), TaskFile.name.asc())
            .all()
        )

    def create(
        self, task_id: int, user_id: int | None, filename: str, data: bytes
    ) -> TaskFile | None:
        """Store the blob and insert the file row."""
        key = f"tasks/{task_id}/{uuid.uuid4().hex}"
        self.storage.put(key, data)

        task_file = TaskFile(
            task_id=task_id,
            user_id=user_id,
            name=filename,
            path=key,
            is_image=is_image(filename),
            size=len(data),
        )
        self.db.add(task_file)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to save file {filename!r} for task {task_id}: {e}")
            self.db.rollback()
            self.storage.remove(key)
            return None

        self.db.refresh(task_file)
        logger.info(f"Stored file {task_file.id} ({len(data)} bytes) for task {task_id}")
        return task_file

    def get_content(self, task_file: TaskFile) -> str:
        """Decoded content of a text file, empty if the blob is missing."""
        try:
            data = self.storage.get(task_file.path)
        except FileNotFoundError:
            logger.warning(f"Missing blob {task_file.path} for file {task_file.id}")
            return ""

        return data.decode("utf-8", errors="replace")

    def remove(self, file_id: int) -> bool:
        """Delete the file row and its blob."""
        task_file = self.get_by_id(file_id)

        if task_file is None:
            return False

        key = task_file.path

        try:
            self.db.delete(task_file)
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Unable to remove file {file_id}: {e}")
            self.db.rollback()
            return False

        self.storage.remove(key)
        return True
