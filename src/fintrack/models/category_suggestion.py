"""Category suggestions and the training examples they are learned from."""
from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel
from fintrack.models.category_rule import TRANSACTION_TYPES, in_list


class CategoryTrainingData(BaseModel):
    """A piece of transaction text the user has filed under a category."""

    __tablename__ = "category_training_data"
    __table_args__ = (
        CheckConstraint(
            in_list("source_type", TRANSACTION_TYPES),
            name="ck_category_training_data_source_type",
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_text: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    source_type: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<CategoryTrainingData(id={self.id}, text={self.transaction_text!r}, "
            f"category_id={self.category_id})>"
        )


class CategorySuggestion(BaseModel):
    """A category proposed for a transaction, awaiting the user's answer.

    approved is None until the user responds.
    """

    __tablename__ = "category_suggestions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_id: Mapped[UUID] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    suggested_category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    confidence_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    approved: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=None)
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def __repr__(self) -> str:
        return (
            f"<CategorySuggestion(id={self.id}, transaction_id={self.transaction_id}, "
            f"category_id={self.suggested_category_id}, score={self.confidence_score})>"
        )
