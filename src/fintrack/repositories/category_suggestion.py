"""Repositories for category suggestions and their training data."""
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category_suggestion import CategorySuggestion, CategoryTrainingData
from fintrack.repositories.base import BaseRepository


class CategoryTrainingDataRepository(BaseRepository[CategoryTrainingData]):
    """Repository for CategoryTrainingData model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, CategoryTrainingData)

    async def get_all_by_user(self, user_id: UUID) -> list[CategoryTrainingData]:
        """All training examples of a user, oldest first."""
        result = await self.db.execute(
            select(CategoryTrainingData)
            .where(CategoryTrainingData.user_id == user_id)
            .order_by(CategoryTrainingData.created_at.asc(), CategoryTrainingData.id.asc())
        )
        return list(result.scalars().all())


class CategorySuggestionRepository(BaseRepository[CategorySuggestion]):
    """Repository for CategorySuggestion model."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, CategorySuggestion)

    async def get_by_user(self, user_id: UUID, suggestion_id: UUID) -> CategorySuggestion | None:
        """Get suggestion only if it belongs to the specified user."""
        result = await self.db.execute(
            select(CategorySuggestion).where(
                CategorySuggestion.id == suggestion_id, CategorySuggestion.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_by_transaction(
        self, user_id: UUID, transaction_id: UUID
    ) -> list[CategorySuggestion]:
        """Suggestions for one transaction, most confident first."""
        result = await self.db.execute(
            select(CategorySuggestion)
            .where(
                CategorySuggestion.user_id == user_id,
                CategorySuggestion.transaction_id == transaction_id,
            )
            .order_by(
                CategorySuggestion.confidence_score.desc().nulls_last(),
                CategorySuggestion.created_at.asc(),
            )
        )
        return list(result.scalars().all())

    async def replace_pending(
        self, user_id: UUID, transaction_id: UUID, suggestions: list[CategorySuggestion]
    ) -> list[CategorySuggestion]:
        """Drop unanswered suggestions for the transaction and store new ones in one commit."""
        await self.db.execute(
            delete(CategorySuggestion).where(
                CategorySuggestion.user_id == user_id,
                CategorySuggestion.transaction_id == transaction_id,
                CategorySuggestion.approved.is_(None),
            )
        )
        self.db.add_all(suggestions)
        await self.db.commit()
        for suggestion in suggestions:
            await self.db.refresh(suggestion)
        return suggestions
