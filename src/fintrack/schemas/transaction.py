"""Transaction request/response schemas.

All amounts are in minor units (cents) and should be interpreted using the
`money` metadata returned by list endpoints.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fintrack.schemas.category_rule import TransactionType
from fintrack.schemas.common import MoneyMeta, PaginationMeta


class TransactionCreate(BaseModel):
    """Create payload. Omit category_id to let category rules decide."""

    transaction_type: TransactionType
    txn_date: date
    amount: int = Field(..., ge=0, description="Amount in minor units")
    description: str | None = None
    merchant: str | None = Field(None, max_length=255)
    note: str | None = None
    tag: str | None = Field(None, max_length=100)
    location: str | None = Field(None, max_length=255)
    goal_name: str | None = Field(None, max_length=255)
    bill_name: str | None = Field(None, max_length=255)
    investment_type: str | None = Field(None, max_length=100)
    category_id: UUID | None = None


class TransactionResponse(BaseModel):
    id: UUID
    transaction_type: str
    txn_date: date
    amount: int
    description: str | None
    merchant: str | None
    note: str | None
    tag: str | None
    location: str | None
    goal_name: str | None
    bill_name: str | None
    investment_type: str | None
    category_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionCreateResult(TransactionResponse):
    auto_categorized: bool = Field(
        False, description="True when the category was assigned by a category rule"
    )


class TransactionListResult(BaseModel):
    transactions: list[TransactionResponse]
    pagination: PaginationMeta
    money: MoneyMeta


class TransactionCategoryUpdate(BaseModel):
    """Manually set (or clear with null) a transaction's category."""

    category_id: UUID | None


class CategorySummary(BaseModel):
    category_id: UUID | None
    category: str = Field(description="Category name, or 'Uncategorized'")
    amount: int = Field(description="Total amount in minor units")
    count: int = Field(description="Number of transactions")


class RecategorizeRequest(BaseModel):
    only_uncategorized: bool = Field(
        True, description="Only touch transactions without a category"
    )
    transaction_type: TransactionType | None = None


class RecategorizeResult(BaseModel):
    evaluated: int = Field(description="Transactions checked against the rules")
    updated: int = Field(description="Transactions whose category changed")
