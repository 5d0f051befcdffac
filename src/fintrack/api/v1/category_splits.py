"""Category split endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_current_user, get_db
from fintrack.models.user import User
from fintrack.schemas.category_split import (
    CategorySplitCreate,
    CategorySplitListResult,
    CategorySplitResponse,
    CategorySplitTotal,
)
from fintrack.services.category_split import CategorySplitService

router = APIRouter(tags=["category-splits"])


@router.get(
    "/transactions/{transaction_id}/splits",
    response_model=CategorySplitListResult,
    summary="List a transaction's category splits",
    description="""
    Splits in creation order. `allocated` is the sum of their amounts, which
    may differ from the transaction amount.
    """,
    responses={404: {"description": "Transaction not found"}},
)
async def list_splits(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategorySplitListResult:
    return await CategorySplitService(db).list_splits(current_user.id, transaction_id)


@router.post(
    "/transactions/{transaction_id}/splits",
    response_model=CategorySplitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Split a transaction",
    description="""
    File part of a transaction's amount (minor units, greater than zero)
    under one of the user's categories.
    """,
    responses={
        400: {"description": "Invalid amount or category not owned by user"},
        404: {"description": "Transaction not found"},
    },
)
async def create_split(
    transaction_id: UUID,
    data: CategorySplitCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategorySplitResponse:
    service = CategorySplitService(db)
    split = await service.create_split(current_user.id, transaction_id, data)
    return await service.describe(current_user.id, split)


@router.get(
    "/category-splits/totals",
    response_model=list[CategorySplitTotal],
    summary="Split totals by category",
    description="Sum and count of splits per category, largest amount first.",
)
async def split_totals(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[CategorySplitTotal]:
    return await CategorySplitService(db).split_totals(current_user.id)


@router.get(
    "/category-splits/totals/{category_id}",
    response_model=CategorySplitTotal,
    summary="Split total for one category",
    description="Zero total and count when the category has no splits.",
)
async def category_split_total(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategorySplitTotal:
    return await CategorySplitService(db).category_split_total(current_user.id, category_id)


@router.put(
    "/category-splits/{split_id}",
    response_model=CategorySplitResponse,
    summary="Replace a category split",
    responses={
        400: {"description": "Invalid amount or category not owned by user"},
        404: {"description": "Split not found"},
    },
)
async def update_split(
    split_id: UUID,
    data: CategorySplitCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategorySplitResponse:
    service = CategorySplitService(db)
    split = await service.update_split(current_user.id, split_id, data)
    return await service.describe(current_user.id, split)


@router.delete(
    "/category-splits/{split_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category split",
    description="Deleting a split that no longer exists also succeeds.",
    responses={404: {"description": "Split belongs to another user"}},
)
async def delete_split(
    split_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await CategorySplitService(db).delete_split(current_user.id, split_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
