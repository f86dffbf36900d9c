"""Task attachment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TaskFileResponse(BaseModel):
    """Attachment metadata response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    name: str
    is_image: bool
    size: int
    user_id: int | None
    date_creation: datetime
