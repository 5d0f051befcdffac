"""Transaction model: expenses, incomes, goal contributions, bills and investments."""
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fintrack.models.base import BaseModel
from fintrack.models.category_rule import MATCH_FIELDS


class Transaction(BaseModel):
    """A single money movement of one of the five transaction types."""

    __tablename__ = "transactions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    txn_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # Minor units (cents).
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Fields category rules can match against.
    merchant: Mapped[str | None] = mapped_column(String(255), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    tag: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    goal_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bill_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    investment_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    __table_args__ = (
        Index("ix_transactions_user_id_type_date", "user_id", "transaction_type", "txn_date"),
    )

    user: Mapped["User"] = relationship("User", back_populates="transactions", lazy="raise")

    def match_fields(self) -> dict[str, str | None]:
        """Values of the fields category rules are evaluated against."""
        return {name: getattr(self, name) for name in MATCH_FIELDS}

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, type={self.transaction_type}, "
            f"merchant={self.merchant}, amount={self.amount})>"
        )
