"""Category repository with user-scoped queries."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category import Category
from fintrack.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model with user-scoped security."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_by_user(self, user_id: UUID, category_id: UUID) -> Category | None:
        """Get category only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Category).where(Category.id == category_id, Category.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_all_by_user(self, user_id: UUID) -> list[Category]:
        """All categories of a user, ordered by name."""
        result = await self.db.execute(
            select(Category).where(Category.user_id == user_id).order_by(Category.name)
        )
        return list(result.scalars().all())

    async def get_by_name(self, user_id: UUID, name: str) -> Category | None:
        result = await self.db.execute(
            select(Category).where(Category.user_id == user_id, Category.name == name)
        )
        return result.scalar_one_or_none()

    async def get_names_by_ids(self, user_id: UUID, ids: set[UUID]) -> dict[UUID, str]:
        """Map category id -> name for the given ids that belong to the user."""
        if not ids:
            return {}
        result = await self.db.execute(
            select(Category.id, Category.name).where(
                Category.user_id == user_id, Category.id.in_(ids)
            )
        )
        return {row.id: row.name for row in result}

    async def create_many(self, categories: list[Category]) -> list[Category]:
        """Insert several categories in one commit."""
        self.db.add_all(categories)
        await self.db.commit()
        for category in categories:
            await self.db.refresh(category)
        return categories
