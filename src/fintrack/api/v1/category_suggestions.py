"""Category suggestion and training data endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_current_user, get_db
from fintrack.models.user import User
from fintrack.schemas.category_suggestion import (
    GenerateSuggestionsRequest,
    SuggestionDecision,
    SuggestionListResult,
    SuggestionResponse,
    TrainingDataCreate,
    TrainingDataResponse,
)
from fintrack.services.category_suggestion import CategorySuggestionService

router = APIRouter(tags=["category-suggestions"])


@router.post(
    "/category-suggestions/training",
    response_model=TrainingDataResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add training data",
    description="Record that a piece of transaction text belongs under a category.",
    responses={400: {"description": "Category not owned by user"}},
)
async def add_training_data(
    data: TrainingDataCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TrainingDataResponse:
    example = await CategorySuggestionService(db).add_training_data(current_user.id, data)
    return TrainingDataResponse.model_validate(example)


@router.get(
    "/category-suggestions/training",
    response_model=list[TrainingDataResponse],
    summary="List training data",
)
async def list_training_data(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[TrainingDataResponse]:
    examples = await CategorySuggestionService(db).list_training_data(current_user.id)
    return [TrainingDataResponse.model_validate(e) for e in examples]


@router.post(
    "/transactions/{transaction_id}/suggestions",
    response_model=SuggestionListResult,
    status_code=status.HTTP_201_CREATED,
    summary="Generate category suggestions",
    description="""
    Compare the transaction's text with the user's training data and store
    up to three suggested categories, most confident first. Earlier
    suggestions the user has not answered are replaced.
    """,
    responses={404: {"description": "Transaction not found"}},
)
async def generate_suggestions(
    transaction_id: UUID,
    data: GenerateSuggestionsRequest | None = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SuggestionListResult:
    data = data or GenerateSuggestionsRequest()
    suggestions = await CategorySuggestionService(db).generate_suggestions(
        current_user.id, transaction_id, data.text
    )
    return SuggestionListResult(suggestions=suggestions, total=len(suggestions))


@router.get(
    "/transactions/{transaction_id}/suggestions",
    response_model=SuggestionListResult,
    summary="List category suggestions",
    responses={404: {"description": "Transaction not found"}},
)
async def list_suggestions(
    transaction_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SuggestionListResult:
    suggestions = await CategorySuggestionService(db).list_suggestions(
        current_user.id, transaction_id
    )
    return SuggestionListResult(suggestions=suggestions, total=len(suggestions))


@router.post(
    "/category-suggestions/{suggestion_id}/respond",
    response_model=SuggestionResponse,
    summary="Approve or reject a suggestion",
    description="""
    Approving files the transaction under the suggested category and adds
    its text to the training data.
    """,
    responses={404: {"description": "Suggestion not found"}},
)
async def respond_to_suggestion(
    suggestion_id: UUID,
    data: SuggestionDecision,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SuggestionResponse:
    return await CategorySuggestionService(db).respond(
        current_user.id, suggestion_id, data.approved
    )
