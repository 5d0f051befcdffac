"""Category splits: one transaction's amount divided across several categories."""
from uuid import UUID

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.models.base import BaseModel


class TransactionCategorySplit(BaseModel):
    """A share of a transaction's amount filed under one category."""

    __tablename__ = "transaction_category_splits"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_category_splits_amount_positive"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_id: Mapped[UUID] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Minor units (cents).
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<TransactionCategorySplit(id={self.id}, transaction_id={self.transaction_id}, "
            f"category_id={self.category_id}, amount={self.amount})>"
        )
