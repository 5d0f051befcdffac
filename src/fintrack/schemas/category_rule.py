"""Pydantic schemas for category rule endpoints."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fintrack.schemas.category import CategoryRef

TransactionType = Literal["expense", "income", "goal", "bill", "investment"]
MatchField = Literal[
    "merchant", "note", "tag", "location", "goal_name", "bill_name", "investment_type"
]
MatchOperator = Literal["equals", "contains", "starts_with", "ends_with"]


def _dedupe(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _require_text(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v


class CategoryRuleCreate(BaseModel):
    """Create payload. Every field except priority and is_active is required."""

    name: str = Field(..., min_length=1, max_length=255)
    match_field: MatchField
    match_operator: MatchOperator
    match_value: str = Field(..., min_length=1, description="Value compared case-insensitively")
    category_id: UUID
    applies_to: list[TransactionType] = Field(
        ..., description="Transaction types this rule is restricted to (at least one)"
    )
    priority: int | None = Field(None, description="Higher runs first; defaults to 1")
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("applies_to")
    @classmethod
    def unique_types(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class CategoryRuleUpdate(BaseModel):
    """Partial update; only provided fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    match_field: MatchField | None = None
    match_operator: MatchOperator | None = None
    match_value: str | None = Field(None, min_length=1)
    category_id: UUID | None = None
    applies_to: list[TransactionType] | None = None
    priority: int | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        return v if v is None else _require_text(v)

    @field_validator("applies_to")
    @classmethod
    def unique_types(cls, v: list[str] | None) -> list[str] | None:
        return v if v is None else _dedupe(v)


class CategoryRuleResponse(BaseModel):
    id: UUID
    name: str
    match_field: str
    match_operator: str
    match_value: str
    category_id: UUID
    category: CategoryRef | None = None
    applies_to: list[str]
    priority: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryRuleListResult(BaseModel):
    rules: list[CategoryRuleResponse]
    total: int


class MatchFields(BaseModel):
    """Text fields of a transaction-like record that rules can match."""

    merchant: str | None = None
    note: str | None = None
    tag: str | None = None
    location: str | None = None
    goal_name: str | None = None
    bill_name: str | None = None
    investment_type: str | None = None


class RuleEvaluationRequest(BaseModel):
    transaction_type: TransactionType
    fields: MatchFields = Field(default_factory=MatchFields)


class RuleEvaluationResult(BaseModel):
    matched: bool
    category_id: UUID | None = None
    rule_id: UUID | None = None
    rule_name: str | None = None
