"""Category rule repository with user-scoped queries."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category_rule import CategoryRule
from fintrack.repositories.base import BaseRepository

# Evaluation order; equal priorities fall back to creation order, then id.
_EVALUATION_ORDER = (
    CategoryRule.priority.desc(),
    CategoryRule.created_at.asc(),
    CategoryRule.id.asc(),
)


class CategoryRuleRepository(BaseRepository[CategoryRule]):
    """Repository for CategoryRule model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, CategoryRule)

    async def get_by_user(self, user_id: UUID, rule_id: UUID) -> CategoryRule | None:
        """Get rule only if it belongs to the specified user."""
        result = await self.db.execute(
            select(CategoryRule).where(
                CategoryRule.id == rule_id, CategoryRule.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_all_by_user(self, user_id: UUID) -> list[CategoryRule]:
        """All of a user's rules (active or not) in evaluation order."""
        result = await self.db.execute(
            select(CategoryRule)
            .where(CategoryRule.user_id == user_id)
            .order_by(*_EVALUATION_ORDER)
        )
        return list(result.scalars().all())

    async def get_active_for_type(
        self, user_id: UUID, transaction_type: str
    ) -> list[CategoryRule]:
        """Active rules whose applies_to includes transaction_type, in evaluation order."""
        result = await self.db.execute(
            select(CategoryRule)
            .where(
                CategoryRule.user_id == user_id,
                CategoryRule.is_active.is_(True),
                CategoryRule.applies_to.contains([transaction_type]),
            )
            .order_by(*_EVALUATION_ORDER)
        )
        return list(result.scalars().all())

    async def get_active_by_user(self, user_id: UUID) -> list[CategoryRule]:
        """All active rules of a user, in evaluation order (used for bulk recategorization)."""
        result = await self.db.execute(
            select(CategoryRule)
            .where(CategoryRule.user_id == user_id, CategoryRule.is_active.is_(True))
            .order_by(*_EVALUATION_ORDER)
        )
        return list(result.scalars().all())
