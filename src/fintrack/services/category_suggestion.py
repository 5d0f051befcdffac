"""Category suggestions learned from the user's own categorizations."""
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.suggestions import score_categories, transaction_text
from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.models.category_suggestion import CategorySuggestion, CategoryTrainingData
from fintrack.models.transaction import Transaction
from fintrack.repositories.category import CategoryRepository
from fintrack.repositories.category_suggestion import (
    CategorySuggestionRepository,
    CategoryTrainingDataRepository,
)
from fintrack.repositories.transaction import TransactionRepository
from fintrack.schemas.category import CategoryRef
from fintrack.schemas.category_suggestion import SuggestionResponse, TrainingDataCreate

logger = logging.getLogger(__name__)


def to_response(suggestion: CategorySuggestion, names: dict[UUID, str]) -> SuggestionResponse:
    category = None
    if suggestion.suggested_category_id in names:
        category = CategoryRef(
            id=suggestion.suggested_category_id, name=names[suggestion.suggested_category_id]
        )
    return SuggestionResponse(
        id=suggestion.id,
        transaction_id=suggestion.transaction_id,
        suggested_category_id=suggestion.suggested_category_id,
        category=category,
        confidence_score=suggestion.confidence_score,
        approved=suggestion.approved,
        approved_at=suggestion.approved_at,
        created_at=suggestion.created_at,
    )


def text_of(transaction: Transaction) -> str:
    return transaction_text({**transaction.match_fields(), "description": transaction.description})


class CategorySuggestionService:
    """Service layer for training data, suggestion generation and user responses."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.suggestion_repo = CategorySuggestionRepository(db)
        self.training_repo = CategoryTrainingDataRepository(db)
        self.transaction_repo = TransactionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def _get_transaction(self, user_id: UUID, transaction_id: UUID) -> Transaction:
        transaction = await self.transaction_repo.get_by_user(user_id, transaction_id)
        if transaction is None:
            raise NotFoundError("TXN_001", {"transaction_id": str(transaction_id)})
        return transaction

    async def _describe_all(
        self, user_id: UUID, suggestions: list[CategorySuggestion]
    ) -> list[SuggestionResponse]:
        names = await self.category_repo.get_names_by_ids(
            user_id, {s.suggested_category_id for s in suggestions}
        )
        return [to_response(s, names) for s in suggestions]

    async def add_training_data(
        self, user_id: UUID, payload: TrainingDataCreate
    ) -> CategoryTrainingData:
        """
        Raises:
            ValidationError: Category not owned by the user
        """
        if await self.category_repo.get_by_user(user_id, payload.category_id) is None:
            raise ValidationError("SUGG_002", {"category_id": str(payload.category_id)})
        return await self.training_repo.create(
            CategoryTrainingData(
                user_id=user_id,
                transaction_text=payload.transaction_text,
                category_id=payload.category_id,
                source_type=payload.source_type,
            )
        )

    async def list_training_data(self, user_id: UUID) -> list[CategoryTrainingData]:
        return await self.training_repo.get_all_by_user(user_id)

    async def generate_suggestions(
        self, user_id: UUID, transaction_id: UUID, text: str | None = None
    ) -> list[SuggestionResponse]:
        """Score the user's categories for a transaction and store the best ones.

        Unanswered suggestions from an earlier run are replaced; answered
        ones are kept. Without usable text or training data nothing is
        suggested.

        Raises:
            NotFoundError: Transaction missing, deleted or owned by another user
        """
        transaction = await self._get_transaction(user_id, transaction_id)
        text = (text or "").strip() or text_of(transaction)

        ranked = []
        if text:
            examples = await self.training_repo.get_all_by_user(user_id)
            ranked = score_categories(text, transaction.transaction_type, examples)

        suggestions = await self.suggestion_repo.replace_pending(
            user_id,
            transaction.id,
            [
                CategorySuggestion(
                    user_id=user_id,
                    transaction_id=transaction.id,
                    suggested_category_id=category_id,
                    confidence_score=score,
                )
                for category_id, score in ranked
            ],
        )
        logger.info(
            "Category suggestions generated",
            extra={
                "user_id": str(user_id),
                "transaction_id": str(transaction.id),
                "count": len(suggestions),
            },
        )
        return await self._describe_all(user_id, suggestions)

    async def list_suggestions(
        self, user_id: UUID, transaction_id: UUID
    ) -> list[SuggestionResponse]:
        await self._get_transaction(user_id, transaction_id)
        suggestions = await self.suggestion_repo.get_by_transaction(user_id, transaction_id)
        return await self._describe_all(user_id, suggestions)

    async def respond(
        self, user_id: UUID, suggestion_id: UUID, approved: bool
    ) -> SuggestionResponse:
        """Record the user's answer to a suggestion.

        Approving files the transaction under the suggested category and
        keeps the transaction's text as training data for later suggestions.

        Raises:
            NotFoundError: Suggestion missing or owned by another user
        """
        suggestion = await self.suggestion_repo.get_by_user(user_id, suggestion_id)
        if suggestion is None:
            raise NotFoundError("SUGG_001", {"suggestion_id": str(suggestion_id)})

        if approved:
            transaction = await self.transaction_repo.get_by_user(
                user_id, suggestion.transaction_id
            )
            if transaction is None:
                logger.warning(
                    "Approved suggestion for a deleted transaction",
                    extra={
                        "user_id": str(user_id),
                        "transaction_id": str(suggestion.transaction_id),
                    },
                )
            else:
                transaction.category_id = suggestion.suggested_category_id
                text = text_of(transaction)
                if text:
                    self.db.add(
                        CategoryTrainingData(
                            user_id=user_id,
                            transaction_text=text,
                            category_id=suggestion.suggested_category_id,
                            source_type=transaction.transaction_type,
                        )
                    )

        suggestion = await self.suggestion_repo.apply(
            suggestion, {"approved": approved, "approved_at": datetime.now(timezone.utc)}
        )
        return (await self._describe_all(user_id, [suggestion]))[0]
