"""Category schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("The name is required")
        return value


class CategoryCreate(CategoryBase):
    """Create a new category in a project."""


class CategoryUpdate(CategoryBase):
    """Replace a category (all fields required)."""


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    name: str
