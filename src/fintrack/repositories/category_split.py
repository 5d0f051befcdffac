"""Category split repository with user-scoped queries."""
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category import Category
from fintrack.models.category_split import TransactionCategorySplit
from fintrack.models.transaction import Transaction
from fintrack.repositories.base import BaseRepository


class CategorySplitRepository(BaseRepository[TransactionCategorySplit]):
    """Repository for TransactionCategorySplit model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, TransactionCategorySplit)

    async def get_by_user(
        self, user_id: UUID, split_id: UUID
    ) -> TransactionCategorySplit | None:
        """Get split only if it belongs to the specified user."""
        result = await self.db.execute(
            select(TransactionCategorySplit).where(
                TransactionCategorySplit.id == split_id,
                TransactionCategorySplit.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_transaction(
        self, user_id: UUID, transaction_id: UUID
    ) -> list[TransactionCategorySplit]:
        """Splits of one transaction, oldest first."""
        result = await self.db.execute(
            select(TransactionCategorySplit)
            .where(
                TransactionCategorySplit.user_id == user_id,
                TransactionCategorySplit.transaction_id == transaction_id,
            )
            .order_by(TransactionCategorySplit.created_at.asc(), TransactionCategorySplit.id.asc())
        )
        return list(result.scalars().all())

    async def get_totals(
        self, user_id: UUID, category_id: UUID | None = None
    ) -> list[tuple[UUID, str, int, int]]:
        """
        Aggregate split amounts by category, ignoring deleted transactions.
        Returns rows of (category_id, category_name, total_amount, count).
        """
        query = (
            select(
                TransactionCategorySplit.category_id,
                Category.name,
                func.sum(TransactionCategorySplit.amount).label("amount"),
                func.count(TransactionCategorySplit.id).label("count"),
            )
            .join(Category, TransactionCategorySplit.category_id == Category.id)
            .join(Transaction, TransactionCategorySplit.transaction_id == Transaction.id)
            .where(
                TransactionCategorySplit.user_id == user_id,
                Transaction.deleted_at.is_(None),
            )
            .group_by(TransactionCategorySplit.category_id, Category.name)
        )
        if category_id:
            query = query.where(TransactionCategorySplit.category_id == category_id)

        result = await self.db.execute(query)
        return [
            (row.category_id, row.name, int(row.amount or 0), int(row.count or 0))
            for row in result
        ]
