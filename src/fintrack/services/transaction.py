"""Transaction service: creation with rule-based categorization, and bulk recategorization."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.rules import find_first_match
from fintrack.categorization.service import CategoryRuleEvaluator
from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.models.category_rule import MATCH_FIELDS
from fintrack.models.transaction import Transaction
from fintrack.repositories.category import CategoryRepository
from fintrack.repositories.category_rule import CategoryRuleRepository
from fintrack.repositories.transaction import TransactionFilters, TransactionRepository
from fintrack.schemas.transaction import (
    CategorySummary,
    RecategorizeResult,
    TransactionCreate,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for transaction workflows that involve category rules."""

    def __init__(self, db: AsyncSession):
        """Initialize the service.

        Args:
            db: Database session for persistence
        """
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)
        self.rule_repo = CategoryRuleRepository(db)
        self.evaluator = CategoryRuleEvaluator(db)

    async def _check_category(self, user_id: UUID, category_id: UUID) -> None:
        if await self.category_repo.get_by_user(user_id, category_id) is None:
            raise ValidationError("TXN_002", {"category_id": str(category_id)})

    async def create_transaction(
        self, user_id: UUID, payload: TransactionCreate
    ) -> tuple[Transaction, bool]:
        """Persist a transaction, filling its category from the user's rules when omitted.

        Returns:
            (transaction, auto_categorized)

        Raises:
            ValidationError: If an explicit category_id is not the user's
        """
        data = payload.model_dump()
        category_id = data.pop("category_id")
        auto_categorized = False

        if category_id is not None:
            await self._check_category(user_id, category_id)
        else:
            fields = {name: data.get(name) for name in MATCH_FIELDS}
            category_id = await self.evaluator.apply_category_rules(
                user_id, payload.transaction_type, fields
            )
            auto_categorized = category_id is not None

        transaction = Transaction(user_id=user_id, category_id=category_id, **data)
        transaction = await self.transaction_repo.create(transaction)
        return transaction, auto_categorized

    async def get_transaction(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        transaction = await self.transaction_repo.get_by_user(user_id, transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001", {"transaction_id": str(transaction_id)})
        return transaction

    async def set_category(
        self, user_id: UUID, transaction_id: UUID, category_id: UUID | None
    ) -> Transaction:
        transaction = await self.get_transaction(user_id, transaction_id)
        if category_id is not None:
            await self._check_category(user_id, category_id)
        return await self.transaction_repo.apply(transaction, {"category_id": category_id})

    async def delete_transaction(self, user_id: UUID, transaction_id: UUID) -> None:
        transaction = await self.get_transaction(user_id, transaction_id)
        await self.transaction_repo.soft_delete(transaction)

    async def recategorize(
        self,
        user_id: UUID,
        only_uncategorized: bool = True,
        transaction_type: str | None = None,
    ) -> RecategorizeResult:
        """Re-apply category rules to existing transactions.

        Rules are loaded once; each transaction is matched against the rules
        that apply to its own type. Transactions no rule matches keep their
        current category.
        """
        rules = await self.rule_repo.get_active_by_user(user_id)
        transactions = await self.transaction_repo.get_for_recategorization(
            user_id, only_uncategorized=only_uncategorized, transaction_type=transaction_type
        )
        if not rules:
            return RecategorizeResult(evaluated=len(transactions), updated=0)

        updated = 0
        for txn in transactions:
            rule = find_first_match(rules, txn.transaction_type, txn.match_fields())
            if rule is not None and txn.category_id != rule.category_id:
                txn.category_id = rule.category_id
                updated += 1

        if updated:
            await self.db.commit()

        logger.info(
            "Transactions recategorized",
            extra={"user_id": str(user_id), "evaluated": len(transactions), "updated": updated},
        )
        return RecategorizeResult(evaluated=len(transactions), updated=updated)

    async def category_summary(
        self,
        user_id: UUID,
        transaction_type: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[CategorySummary]:
        rows = await self.transaction_repo.get_category_summary(
            user_id, transaction_type=transaction_type, start_date=start_date, end_date=end_date
        )
        summaries = [
            CategorySummary(
                category_id=category_id,
                category=name or "Uncategorized",
                amount=amount,
                count=count,
            )
            for category_id, name, amount, count in rows
        ]
        summaries.sort(key=lambda s: s.amount, reverse=True)
        return summaries

    async def search(
        self,
        user_id: UUID,
        filters: TransactionFilters,
        sort_by: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[Transaction], int]:
        return await self.transaction_repo.search(
            user_id, filters, sort_by=sort_by, skip=(page - 1) * limit, limit=limit
        )
