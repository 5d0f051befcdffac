"""Category management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_current_user, get_db
from fintrack.models.user import User
from fintrack.schemas.category import (
    CategoryCreate,
    CategoryListResult,
    CategoryResponse,
    CategoryUpdate,
    DefaultCategoriesResult,
)
from fintrack.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryListResult,
    summary="List user's categories",
    description="All categories of the authenticated user, ordered by name.",
)
async def list_categories(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryListResult:
    categories = await CategoryService(db).list_categories(current_user.id)
    return CategoryListResult(categories=categories, total=len(categories))


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    responses={
        400: {"description": "Invalid parent category"},
        409: {"description": "Category name already used"},
    },
)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    service = CategoryService(db)
    category = await service.create_category(current_user.id, data)
    return await service.describe(current_user.id, category)


@router.post(
    "/defaults",
    response_model=DefaultCategoriesResult,
    summary="Create default categories",
    description="""
    Add the starter category set. Defaults the user already has (matched by
    name) are left untouched, so calling this more than once is safe.
    """,
)
async def create_default_categories(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> DefaultCategoriesResult:
    created, categories = await CategoryService(db).ensure_default_categories(current_user.id)
    return DefaultCategoriesResult(created=created, categories=categories)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
    responses={
        400: {"description": "Invalid parent category"},
        404: {"description": "Category not found"},
        409: {"description": "Category name already used"},
    },
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    service = CategoryService(db)
    category = await service.update_category(current_user.id, category_id, data)
    return await service.describe(current_user.id, category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category",
    description="""
    Delete a category. Its sub-categories and category rules are deleted with
    it; transactions in the category become uncategorized.
    """,
    responses={404: {"description": "Category not found"}},
)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await CategoryService(db).delete_category(current_user.id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
