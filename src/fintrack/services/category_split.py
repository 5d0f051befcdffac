"""Category splits: dividing one transaction's amount across several categories."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.models.category_split import TransactionCategorySplit
from fintrack.models.transaction import Transaction
from fintrack.repositories.category import CategoryRepository
from fintrack.repositories.category_split import CategorySplitRepository
from fintrack.repositories.transaction import TransactionRepository
from fintrack.schemas.category import CategoryRef
from fintrack.schemas.category_split import (
    CategorySplitCreate,
    CategorySplitListResult,
    CategorySplitResponse,
    CategorySplitTotal,
)

logger = logging.getLogger(__name__)


def to_response(split: TransactionCategorySplit, names: dict[UUID, str]) -> CategorySplitResponse:
    category = None
    if split.category_id in names:
        category = CategoryRef(id=split.category_id, name=names[split.category_id])
    return CategorySplitResponse(
        id=split.id,
        transaction_id=split.transaction_id,
        category_id=split.category_id,
        category=category,
        amount=split.amount,
        note=split.note,
        created_at=split.created_at,
        updated_at=split.updated_at,
    )


class CategorySplitService:
    """Service layer for category split CRUD and per-category totals."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.split_repo = CategorySplitRepository(db)
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def _get_transaction(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        transaction = await self.transaction_repo.get_by_user(user_id, transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001", {"transaction_id": str(transaction_id)})
        return transaction

    async def _check_category(self, user_id: UUID, category_id: UUID) -> None:
        if await self.category_repo.get_by_user(user_id, category_id) is None:
            raise ValidationError("SPLIT_002", {"category_id": str(category_id)})

    async def _warn_if_over_allocated(self, user_id: UUID, transaction: Transaction) -> None:
        splits = await self.split_repo.get_by_transaction(user_id, transaction.id)
        if sum(s.amount for s in splits) > transaction.amount:
            logger.warning(
                "Category splits exceed transaction amount",
                extra={"user_id": str(user_id), "transaction_id": str(transaction.id)},
            )

    async def describe(
        self, user_id: UUID, split: TransactionCategorySplit
    ) -> CategorySplitResponse:
        names = await self.category_repo.get_names_by_ids(user_id, {split.category_id})
        return to_response(split, names)

    async def list_splits(self, user_id: UUID, transaction_id: UUID) -> CategorySplitListResult:
        """
        Raises:
            NotFoundError: Transaction missing, deleted or owned by another user
        """
        await self._get_transaction(user_id, transaction_id)
        splits = await self.split_repo.get_by_transaction(user_id, transaction_id)
        names = await self.category_repo.get_names_by_ids(
            user_id, {split.category_id for split in splits}
        )
        return CategorySplitListResult(
            splits=[to_response(split, names) for split in splits],
            total=len(splits),
            allocated=sum(split.amount for split in splits),
        )

    async def create_split(
        self, user_id: UUID, transaction_id: UUID, payload: CategorySplitCreate
    ) -> TransactionCategorySplit:
        """
        Raises:
            NotFoundError: Transaction missing, deleted or owned by another user
            ValidationError: Category not owned by the user
        """
        transaction = await self._get_transaction(user_id, transaction_id)
        await self._check_category(user_id, payload.category_id)

        split = await self.split_repo.create(
            TransactionCategorySplit(
                user_id=user_id,
                transaction_id=transaction.id,
                category_id=payload.category_id,
                amount=payload.amount,
                note=payload.note,
            )
        )
        logger.info(
            "Category split created",
            extra={"user_id": str(user_id), "transaction_id": str(transaction.id)},
        )
        await self._warn_if_over_allocated(user_id, transaction)
        return split

    async def update_split(
        self, user_id: UUID, split_id: UUID, payload: CategorySplitCreate
    ) -> TransactionCategorySplit:
        """Replace a split's category, amount and note.

        Raises:
            NotFoundError: Split missing or owned by another user
            ValidationError: Category not owned by the user
        """
        split = await self.split_repo.get_by_user(user_id, split_id)
        if split is None:
            raise NotFoundError("SPLIT_001", {"split_id": str(split_id)})
        await self._check_category(user_id, payload.category_id)
        return await self.split_repo.apply(split, payload.model_dump())

    async def delete_split(self, user_id: UUID, split_id: UUID) -> None:
        """Delete a split.

        A split that no longer exists counts as deleted; one that belongs to
        another user is reported as not found.
        """
        split = await self.split_repo.get_by_id(split_id)
        if split is None:
            return
        if split.user_id != user_id:
            raise NotFoundError("SPLIT_001", {"split_id": str(split_id)})
        await self.split_repo.delete(split)

    async def split_totals(self, user_id: UUID) -> list[CategorySplitTotal]:
        """Split totals for every category that has splits, largest first."""
        rows = await self.split_repo.get_totals(user_id)
        totals = [
            CategorySplitTotal(category_id=category_id, category=name, total=total, count=count)
            for category_id, name, total, count in rows
        ]
        totals.sort(key=lambda t: t.total, reverse=True)
        return totals

    async def category_split_total(self, user_id: UUID, category_id: UUID) -> CategorySplitTotal:
        """Split total for one category; zero when it has no splits."""
        rows = await self.split_repo.get_totals(user_id, category_id=category_id)
        if not rows:
            return CategorySplitTotal(category_id=category_id, total=0, count=0)
        _, name, total, count = rows[0]
        return CategorySplitTotal(category_id=category_id, category=name, total=total, count=count)
