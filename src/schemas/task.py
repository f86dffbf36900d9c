"""Task schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Create a new task."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    column_id: int | None = None
    category_id: int = Field(0, ge=0)


class TaskUpdate(BaseModel):
    """Update a task, only the provided fields change."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    column_id: int | None = None
    category_id: int | None = Field(None, ge=0)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    column_id: int
    category_id: int
    title: str
    description: str | None
    position: int
