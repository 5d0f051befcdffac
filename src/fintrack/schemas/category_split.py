"""Pydantic schemas for category split endpoints.

Amounts are in minor units (cents), like transaction amounts.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from fintrack.schemas.category import CategoryRef


class CategorySplitCreate(BaseModel):
    """Split payload. Updates replace all three fields, as on create."""

    category_id: UUID
    amount: int = Field(..., gt=0, description="Share of the transaction in minor units")
    note: str | None = None


class CategorySplitResponse(BaseModel):
    id: UUID
    transaction_id: UUID
    category_id: UUID
    category: CategoryRef | None = None
    amount: int
    note: str | None
    created_at: datetime
    updated_at: datetime


class CategorySplitListResult(BaseModel):
    splits: list[CategorySplitResponse]
    total: int
    allocated: int = Field(description="Sum of the split amounts in minor units")


class CategorySplitTotal(BaseModel):
    category_id: UUID
    category: str | None = Field(None, description="Category name")
    total: int = Field(description="Total split amount in minor units")
    count: int = Field(description="Number of splits")
