"""Category rule endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.api.deps import get_current_user, get_db
from fintrack.models.user import User
from fintrack.schemas.category_rule import (
    CategoryRuleCreate,
    CategoryRuleListResult,
    CategoryRuleResponse,
    CategoryRuleUpdate,
    RuleEvaluationRequest,
    RuleEvaluationResult,
)
from fintrack.services.category_rule import CategoryRuleService

router = APIRouter(prefix="/category-rules", tags=["category-rules"])


@router.get(
    "",
    response_model=CategoryRuleListResult,
    summary="List category rules",
    description="""
    The authenticated user's rules in evaluation order: highest priority
    first, then oldest first among equal priorities.
    """,
)
async def list_rules(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryRuleListResult:
    rules = await CategoryRuleService(db).list_rules(current_user.id)
    return CategoryRuleListResult(rules=rules, total=len(rules))


@router.post(
    "",
    response_model=CategoryRuleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category rule",
    description="""
    Create a rule that assigns `category_id` to transactions whose
    `match_field` satisfies `match_operator` against `match_value`
    (case-insensitive).

    Rules only apply to the transaction types listed in `applies_to`.
    """,
    responses={400: {"description": "Invalid rule or category not owned by user"}},
)
async def create_rule(
    data: CategoryRuleCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryRuleResponse:
    service = CategoryRuleService(db)
    rule = await service.create_rule(current_user.id, data)
    return await service.describe(current_user.id, rule)


@router.post(
    "/evaluate",
    response_model=RuleEvaluationResult,
    summary="Preview rule evaluation",
    description="""
    Report which rule, if any, would categorize a transaction with the given
    type and fields. Nothing is stored.
    """,
    responses={503: {"description": "Rules could not be loaded"}},
)
async def evaluate_rules(
    data: RuleEvaluationRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RuleEvaluationResult:
    return await CategoryRuleService(db).evaluate(current_user.id, data)


@router.patch(
    "/{rule_id}",
    response_model=CategoryRuleResponse,
    summary="Update category rule",
    responses={
        400: {"description": "Invalid rule or category not owned by user"},
        404: {"description": "Rule not found"},
    },
)
async def update_rule(
    rule_id: UUID,
    data: CategoryRuleUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CategoryRuleResponse:
    service = CategoryRuleService(db)
    rule = await service.update_rule(current_user.id, rule_id, data)
    return await service.describe(current_user.id, rule)


@router.delete(
    "/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category rule",
    responses={404: {"description": "Rule belongs to another user"}},
)
async def delete_rule(
    rule_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await CategoryRuleService(db).delete_rule(current_user.id, rule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
