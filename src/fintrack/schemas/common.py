"""Shared response fragments."""

from pydantic import BaseModel, Field


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., USD)")
    minor_unit: int = Field(
        description="Number of decimal places for the currency (e.g., 2 for cents)"
    )


class PaginationMeta(BaseModel):
    """Pagination metadata."""

    page: int = Field(description="Current page number (1-indexed)")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of items")
    total_pages: int = Field(description="Total number of pages")


def build_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    total_pages = (total + limit - 1) // limit if total > 0 else 0
    return PaginationMeta(page=page, limit=limit, total=total, total_pages=total_pages)
