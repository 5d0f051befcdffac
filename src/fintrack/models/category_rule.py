"""Category rules: user-defined field/operator/value matchers that assign a category."""
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fintrack.models.base import BaseModel

TRANSACTION_TYPES: tuple[str, ...] = ("expense", "income", "goal", "bill", "investment")
MATCH_FIELDS: tuple[str, ...] = (
    "merchant",
    "note",
    "tag",
    "location",
    "goal_name",
    "bill_name",
    "investment_type",
)
MATCH_OPERATORS: tuple[str, ...] = ("equals", "contains", "starts_with", "ends_with")


def in_list(column: str, values: tuple[str, ...]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class CategoryRule(BaseModel):
    """A rule that files matching transactions under category_id."""

    __tablename__ = "category_rules"
    __table_args__ = (
        CheckConstraint(in_list("match_field", MATCH_FIELDS), name="ck_category_rules_match_field"),
        CheckConstraint(
            in_list("match_operator", MATCH_OPERATORS), name="ck_category_rules_match_operator"
        ),
        Index("ix_category_rules_user_active_priority", "user_id", "is_active", "priority"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    match_field: Mapped[str] = mapped_column(String(50), nullable=False)
    match_operator: Mapped[str] = mapped_column(String(20), nullable=False)
    match_value: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    applies_to: Mapped[list[str]] = mapped_column(
        ARRAY(String(20)),
        nullable=False,
        default=lambda: list(TRANSACTION_TYPES),
        server_default=text("ARRAY['expense','income','goal','bill','investment']::varchar[]"),
    )
    # Higher value is evaluated first.
    priority: Mapped[int] = mapped_column(Integer, default=1, server_default=text("1"), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="category_rules", lazy="raise")
    category: Mapped["Category"] = relationship("Category", lazy="raise")

    def __repr__(self) -> str:
        return (
            f"<CategoryRule(id={self.id}, {self.match_field} {self.match_operator} "
            f"{self.match_value!r}, priority={self.priority})>"
        )
