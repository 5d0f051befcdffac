"""Pydantic schemas for category suggestions and training data."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fintrack.schemas.category import CategoryRef
from fintrack.schemas.category_rule import TransactionType


class TrainingDataCreate(BaseModel):
    """Teach the suggester that this text belongs under category_id."""

    transaction_text: str = Field(..., min_length=1)
    category_id: UUID
    source_type: TransactionType

    @field_validator("transaction_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("transaction_text must not be blank")
        return v


class TrainingDataResponse(BaseModel):
    id: UUID
    transaction_text: str
    category_id: UUID
    source_type: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GenerateSuggestionsRequest(BaseModel):
    text: str | None = Field(
        None, description="Text to match; defaults to the transaction's merchant, name or note"
    )


class SuggestionResponse(BaseModel):
    id: UUID
    transaction_id: UUID
    suggested_category_id: UUID
    category: CategoryRef | None = None
    confidence_score: float | None
    approved: bool | None = Field(description="None until the user responds")
    approved_at: datetime | None
    created_at: datetime


class SuggestionListResult(BaseModel):
    suggestions: list[SuggestionResponse]
    total: int


class SuggestionDecision(BaseModel):
    approved: bool = Field(
        description="True files the transaction under the suggested category"
    )
