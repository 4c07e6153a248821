"""Request/response schemas for category endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Body for creating a category (admin only)."""

    name: str | None = Field(default=None, max_length=255, description="Unique category name")


class CategoryOut(BaseModel):
    """Category as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
