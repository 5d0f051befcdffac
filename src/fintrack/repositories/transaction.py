"""Transaction repository with filtering and aggregation queries."""
from dataclasses import dataclass
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category import Category
from fintrack.models.transaction import Transaction
from fintrack.repositories.base import BaseRepository

_SORTS = {
    "txn_date": Transaction.txn_date.asc(),
    "-txn_date": Transaction.txn_date.desc(),
    "amount": Transaction.amount.asc(),
    "-amount": Transaction.amount.desc(),
}


@dataclass
class TransactionFilters:
    """Optional filters for listing transactions."""

    transaction_type: str | None = None
    category_id: UUID | None = None
    uncategorized: bool = False
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with filtering and analytics queries.

    Soft-deleted rows are excluded from every query here.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    def _live(self, user_id: UUID) -> Select:
        return select(Transaction).where(
            Transaction.user_id == user_id, Transaction.deleted_at.is_(None)
        )

    async def get_by_user(self, user_id: UUID, transaction_id: UUID) -> Transaction | None:
        """Get transaction only if it belongs to the user and is not deleted."""
        result = await self.db.execute(
            self._live(user_id).where(Transaction.id == transaction_id)
        )
        return result.scalar_one_or_none()

    def _filtered(self, user_id: UUID, filters: TransactionFilters) -> Select:
        query = self._live(user_id)
        if filters.transaction_type:
            query = query.where(Transaction.transaction_type == filters.transaction_type)
        if filters.uncategorized:
            query = query.where(Transaction.category_id.is_(None))
        elif filters.category_id:
            query = query.where(Transaction.category_id == filters.category_id)
        if filters.start_date:
            query = query.where(Transaction.txn_date >= filters.start_date)
        if filters.end_date:
            query = query.where(Transaction.txn_date <= filters.end_date)
        if filters.search:
            query = query.where(Transaction.merchant.ilike(f"%{filters.search}%"))
        return query

    async def search(
        self,
        user_id: UUID,
        filters: TransactionFilters,
        sort_by: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Transaction], int]:
        """Filtered, sorted page of transactions plus the unpaginated total."""
        query = self._filtered(user_id, filters)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        order = _SORTS.get(sort_by or "-txn_date", Transaction.txn_date.desc())
        query = query.order_by(order, Transaction.created_at.desc()).offset(skip).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all()), int(total)

    async def get_for_recategorization(
        self,
        user_id: UUID,
        only_uncategorized: bool = True,
        transaction_type: str | None = None,
    ) -> list[Transaction]:
        query = self._live(user_id)
        if only_uncategorized:
            query = query.where(Transaction.category_id.is_(None))
        if transaction_type:
            query = query.where(Transaction.transaction_type == transaction_type)
        result = await self.db.execute(query.order_by(Transaction.txn_date.desc()))
        return list(result.scalars().all())

    async def get_category_summary(
        self,
        user_id: UUID,
        transaction_type: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[tuple[UUID | None, str | None, int, int]]:
        """
        Aggregate amounts by category.
        Returns rows of (category_id, category_name, total_amount, count).
        """
        query = (
            select(
                Transaction.category_id,
                Category.name,
                func.sum(Transaction.amount).label("amount"),
                func.count(Transaction.id).label("count"),
            )
            .outerjoin(Category, Transaction.category_id == Category.id)
            .where(Transaction.user_id == user_id, Transaction.deleted_at.is_(None))
            .group_by(Transaction.category_id, Category.name)
        )
        if transaction_type:
            query = query.where(Transaction.transaction_type == transaction_type)
        if start_date:
            query = query.where(Transaction.txn_date >= start_date)
        if end_date:
            query = query.where(Transaction.txn_date <= end_date)

        result = await self.db.execute(query)
        return [
            (row.category_id, row.name, int(row.amount or 0), int(row.count or 0))
            for row in result
        ]

    async def soft_delete(self, transaction: Transaction) -> None:
        """Soft delete a transaction by setting deleted_at timestamp."""
        transaction.deleted_at = datetime.now(timezone.utc)
        await self.db.commit()
