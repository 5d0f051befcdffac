"""Category service for business logic operations."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import ConflictError, NotFoundError, ValidationError
from fintrack.models.category import Category
from fintrack.repositories.category import CategoryRepository
from fintrack.schemas.category import (
    CategoryCreate,
    CategoryRef,
    CategoryResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

# Starter set offered to every user (name, description).
DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("Housing", "Rent, mortgage and home maintenance"),
    ("Utilities", "Electricity, water, gas, internet and phone"),
    ("Groceries", "Supermarkets and food shopping"),
    ("Dining", "Restaurants, cafes and takeaway"),
    ("Transportation", "Fuel, transit, rideshare and parking"),
    ("Health", "Pharmacy, doctors and insurance premiums"),
    ("Entertainment", "Streaming, events and hobbies"),
    ("Shopping", "Clothing, electronics and general retail"),
    ("Travel", "Flights, hotels and holidays"),
    ("Education", "Courses, books and tuition"),
    ("Subscriptions", "Recurring memberships and software"),
    ("Salary", "Employment income"),
    ("Freelance", "Side and contract income"),
    ("Investments", "Brokerage, retirement and other investments"),
    ("Savings Goals", "Contributions towards financial goals"),
    ("Bills", "Scheduled bills and loan repayments"),
    ("Other", "Anything that doesn't fit elsewhere"),
]


def to_response(category: Category, names: dict[UUID, str]) -> CategoryResponse:
    """Build a response, resolving the parent name from names (id -> name)."""
    parent = None
    if category.parent_category_id and category.parent_category_id in names:
        parent = CategoryRef(
            id=category.parent_category_id, name=names[category.parent_category_id]
        )
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        parent_category_id=category.parent_category_id,
        parent=parent,
        is_temporary=category.is_temporary,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


class CategoryService:
    """Service layer for category operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.category_repo = CategoryRepository(db)

    async def list_categories(self, user_id: UUID) -> list[CategoryResponse]:
        categories = await self.category_repo.get_all_by_user(user_id)
        names = {c.id: c.name for c in categories}
        return [to_response(c, names) for c in categories]

    async def get_owned(self, user_id: UUID, category_id: UUID) -> Category:
        """Load a user's category.

        Raises:
            NotFoundError: If missing or owned by another user
        """
        category = await self.category_repo.get_by_user(user_id, category_id)
        if category is None:
            raise NotFoundError("CAT_001", {"category_id": str(category_id)})
        return category

    async def describe(self, user_id: UUID, category: Category) -> CategoryResponse:
        names = await self.category_repo.get_names_by_ids(
            user_id, {category.parent_category_id} if category.parent_category_id else set()
        )
        return to_response(category, names)

    async def _check_parent(
        self, user_id: UUID, parent_id: UUID, category_id: UUID | None = None
    ) -> None:
        if category_id is not None and parent_id == category_id:
            raise ValidationError("CAT_003", {"reason": "self_parent"})

        # Walk up from the new parent; reaching category_id would create a cycle.
        seen: set[UUID] = set()
        current = await self.category_repo.get_by_user(user_id, parent_id)
        if current is None:
            raise ValidationError("CAT_003", {"reason": "unknown_parent"})
        while current is not None and current.id not in seen:
            if category_id is not None and current.id == category_id:
                raise ValidationError("CAT_003", {"reason": "cycle"})
            seen.add(current.id)
            if current.parent_category_id is None:
                break
            current = await self.category_repo.get_by_user(user_id, current.parent_category_id)

    async def create_category(self, user_id: UUID, payload: CategoryCreate) -> Category:
        """
        Raises:
            ConflictError: Name already used by this user
            ValidationError: Parent category is not the user's
        """
        if await self.category_repo.get_by_name(user_id, payload.name):
            raise ConflictError("CAT_002", {"name": payload.name})
        if payload.parent_category_id:
            await self._check_parent(user_id, payload.parent_category_id)

        category = Category(
            user_id=user_id,
            name=payload.name,
            description=payload.description,
            parent_category_id=payload.parent_category_id,
            is_temporary=payload.is_temporary,
        )
        return await self.category_repo.create(category)

    async def update_category(
        self, user_id: UUID, category_id: UUID, payload: CategoryUpdate
    ) -> Category:
        category = await self.get_owned(user_id, category_id)
        data = payload.model_dump(exclude_unset=True)

        if "name" in data and data["name"] is None:
            data.pop("name")
        if data.get("name") and data["name"] != category.name:
            if await self.category_repo.get_by_name(user_id, data["name"]):
                raise ConflictError("CAT_002", {"name": data["name"]})
        if data.get("parent_category_id"):
            await self._check_parent(user_id, data["parent_category_id"], category.id)
        if "is_temporary" in data and data["is_temporary"] is None:
            data.pop("is_temporary")

        return await self.category_repo.apply(category, data)

    async def delete_category(self, user_id: UUID, category_id: UUID) -> None:
        """Delete a category; child categories and its rules go with it."""
        category = await self.get_owned(user_id, category_id)
        await self.category_repo.delete(category)
        logger.info("Category deleted", extra={"user_id": str(user_id), "category_id": str(category_id)})

    async def ensure_default_categories(self, user_id: UUID) -> tuple[int, list[CategoryResponse]]:
        """Create any default category the user does not have yet (matched by name).

        Returns:
            (number created, full category list)
        """
        existing = {c.name for c in await self.category_repo.get_all_by_user(user_id)}
        missing = [
            Category(user_id=user_id, name=name, description=description)
            for name, description in DEFAULT_CATEGORIES
            if name not in existing
        ]
        if missing:
            await self.category_repo.create_many(missing)
            logger.info(
                "Default categories created",
                extra={"user_id": str(user_id), "count": len(missing)},
            )
        return len(missing), await self.list_categories(user_id)
