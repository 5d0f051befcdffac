"""Pydantic schemas for category endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryRef(BaseModel):
    """Minimal category reference embedded in other responses."""

    id: UUID
    name: str


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Category name (unique per user)")
    description: str | None = Field(None, description="Optional description")
    parent_category_id: UUID | None = Field(None, description="Parent category for nesting")
    is_temporary: bool = Field(False, description="Marks a short-lived category (e.g., a trip)")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class CategoryUpdate(BaseModel):
    """Partial update; only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    parent_category_id: UUID | None = None
    is_temporary: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    parent_category_id: UUID | None
    parent: CategoryRef | None = Field(None, description="Parent category, when nested")
    is_temporary: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryListResult(BaseModel):
    categories: list[CategoryResponse]
    total: int = Field(description="Total number of categories")


class DefaultCategoriesResult(BaseModel):
    """Result of seeding the default category set."""

    created: int = Field(description="Number of default categories newly created")
    categories: list[CategoryResponse]
