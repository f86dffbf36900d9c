"""Board column schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColumnForm(BaseModel):
    """Create or edit a column (HTML form and JSON API)."""

    title: str = Field(..., min_length=1, max_length=255)
    task_limit: int = Field(0, ge=0)
    description: str = ""

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("The title is required")
        return value


class ColumnMove(BaseModel):
    """Drag and drop payload of the column table."""

    column_id: int
    position: int


class ColumnResponse(BaseModel):
    """Column response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    position: int
    task_limit: int
    description: str | None
