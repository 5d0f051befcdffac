"""Transaction endpoints."""

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_current_user, get_db
from fintrack.config import settings
from fintrack.models.user import User
from fintrack.repositories.transaction import TransactionFilters
from fintrack.schemas.category_rule import TransactionType
from fintrack.schemas.common import MoneyMeta, build_pagination
from fintrack.schemas.transaction import (
    CategorySummary,
    RecategorizeRequest,
    RecategorizeResult,
    TransactionCategoryUpdate,
    TransactionCreate,
    TransactionCreateResult,
    TransactionListResult,
    TransactionResponse,
)
from fintrack.services.transaction import TransactionService

router = APIRouter(prefix="/transactions", tags=["transactions"])

SortField = Literal["txn_date", "-txn_date", "amount", "-amount"]


@router.post(
    "",
    response_model=TransactionCreateResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
    description="""
    Record a transaction. Amounts are in minor units (cents).

    When `category_id` is omitted the user's active category rules for the
    transaction type are evaluated and the first match, if any, is used.
    `auto_categorized` reports whether that happened.
    """,
    responses={400: {"description": "Invalid input or category not owned by user"}},
)
async def create_transaction(
    data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionCreateResult:
    transaction, auto_categorized = await TransactionService(db).create_transaction(
        current_user.id, data
    )
    return TransactionCreateResult.model_validate(transaction).model_copy(
        update={"auto_categorized": auto_categorized}
    )


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with filters",
    description="""
    ## Filters
    - **transaction_type**: expense, income, goal, bill or investment
    - **category_id**: Filter by category
    - **uncategorized**: Only transactions without a category (overrides category_id)
    - **start_date**, **end_date**: Date range filter (inclusive)
    - **search**: Search merchant names (case-insensitive)

    ## Sorting
    - Default: by transaction date (newest first)
    - Use **sort_by** parameter: `txn_date`, `-txn_date`, `amount`, `-amount`
    """,
)
async def list_transactions(
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page (1-100)")] = 20,
    transaction_type: Annotated[
        TransactionType | None, Query(description="Filter by transaction type")
    ] = None,
    category_id: Annotated[UUID | None, Query(description="Filter by category ID")] = None,
    uncategorized: Annotated[
        bool, Query(description="Only transactions without a category")
    ] = False,
    start_date: Annotated[
        date | None, Query(description="Filter from date (inclusive)")
    ] = None,
    end_date: Annotated[
        date | None, Query(description="Filter to date (inclusive)")
    ] = None,
    search: Annotated[str | None, Query(description="Search merchant names")] = None,
    sort_by: Annotated[SortField | None, Query(description="Sort field")] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionListResult:
    filters = TransactionFilters(
        transaction_type=transaction_type,
        category_id=category_id,
        uncategorized=uncategorized,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    transactions, total = await TransactionService(db).search(
        current_user.id, filters, sort_by=sort_by, page=page, limit=limit
    )

    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=build_pagination(page, limit, total),
        money=MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit),
    )


@router.get(
    "/summary",
    response_model=list[CategorySummary],
    summary="Totals by category",
    description="""
    Sum and count of transactions per category, largest amount first.
    Transactions without a category are reported as "Uncategorized".
    """,
)
async def category_summary(
    transaction_type: Annotated[
        TransactionType | None, Query(description="Filter by transaction type")
    ] = None,
    start_date: Annotated[
        date | None, Query(description="Filter from date (inclusive)")
    ] = None,
    end_date: Annotated[
        date | None, Query(description="Filter to date (inclusive)")
    ] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[CategorySummary]:
    return await TransactionService(db).category_summary(
        current_user.id,
        transaction_type=transaction_type,
        start_date=start_date,
        end_date=end_date,
    )


@router.post(
    "/recategorize",
    response_model=RecategorizeResult,
    summary="Re-apply category rules",
    description="""
    Evaluate the user's active category rules against existing
    transactions. By default only uncategorized transactions are touched;
    transactions no rule matches keep their category.
    """,
)
async def recategorize_transactions(
    data: RecategorizeRequest | None = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RecategorizeResult:
    data = data or RecategorizeRequest()
    return await TransactionService(db).recategorize(
        current_user.id,
        only_uncategorized=data.only_uncategorized,
        transaction_type=data.transaction_type,
    )


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    summary="Get transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def get_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    transaction = await TransactionService(db).get_transaction(current_user.id, transaction_id)
    return TransactionResponse.model_validate(transaction)


@router.put(
    "/{transaction_id}/category",
    response_model=TransactionResponse,
    summary="Set transaction category",
    description="Manually assign a category, or send `null` to clear it.",
    responses={
        400: {"description": "Category not owned by user"},
        404: {"description": "Transaction not found"},
    },
)
async def set_transaction_category(
    transaction_id: UUID,
    data: TransactionCategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TransactionResponse:
    transaction = await TransactionService(db).set_category(
        current_user.id, transaction_id, data.category_id
    )
    return TransactionResponse.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete transaction",
    responses={404: {"description": "Transaction not found"}},
)
async def delete_transaction(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await TransactionService(db).delete_transaction(current_user.id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
