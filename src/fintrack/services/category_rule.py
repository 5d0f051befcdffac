"""Category rule management and rule preview."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.service import CategoryRuleEvaluator
from fintrack.config import settings
from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.models.category_rule import CategoryRule
from fintrack.repositories.category import CategoryRepository
from fintrack.repositories.category_rule import CategoryRuleRepository
from fintrack.schemas.category import CategoryRef
from fintrack.schemas.category_rule import (
    CategoryRuleCreate,
    CategoryRuleResponse,
    CategoryRuleUpdate,
    RuleEvaluationRequest,
    RuleEvaluationResult,
)

logger = logging.getLogger(__name__)


def to_response(rule: CategoryRule, names: dict[UUID, str]) -> CategoryRuleResponse:
    category = None
    if rule.category_id in names:
        category = CategoryRef(id=rule.category_id, name=names[rule.category_id])
    return CategoryRuleResponse(
        id=rule.id,
        name=rule.name,
        match_field=rule.match_field,
        match_operator=rule.match_operator,
        match_value=rule.match_value,
        category_id=rule.category_id,
        category=category,
        applies_to=list(rule.applies_to or []),
        priority=rule.priority,
        is_active=rule.is_active,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


class CategoryRuleService:
    """Service layer for category rule CRUD and evaluation preview."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.rule_repo = CategoryRuleRepository(db)
        self.category_repo = CategoryRepository(db)
        self.evaluator = CategoryRuleEvaluator(db)

    async def _check_category(self, user_id: UUID, category_id: UUID) -> None:
        if await self.category_repo.get_by_user(user_id, category_id) is None:
            raise ValidationError("RULE_002", {"category_id": str(category_id)})

    async def list_rules(self, user_id: UUID) -> list[CategoryRuleResponse]:
        """All rules in evaluation order, each with its category name."""
        rules = await self.rule_repo.get_all_by_user(user_id)
        names = await self.category_repo.get_names_by_ids(
            user_id, {rule.category_id for rule in rules}
        )
        return [to_response(rule, names) for rule in rules]

    async def describe(self, user_id: UUID, rule: CategoryRule) -> CategoryRuleResponse:
        names = await self.category_repo.get_names_by_ids(user_id, {rule.category_id})
        return to_response(rule, names)

    async def create_rule(self, user_id: UUID, payload: CategoryRuleCreate) -> CategoryRule:
        """
        Raises:
            ValidationError: Empty applies_to or a category the user does not own
        """
        if not payload.applies_to:
            raise ValidationError("RULE_003")
        await self._check_category(user_id, payload.category_id)

        rule = CategoryRule(
            user_id=user_id,
            name=payload.name,
            match_field=payload.match_field,
            match_operator=payload.match_operator,
            match_value=payload.match_value,
            category_id=payload.category_id,
            applies_to=list(payload.applies_to),
            priority=(
                payload.priority if payload.priority is not None else settings.default_rule_priority
            ),
            is_active=payload.is_active,
        )
        rule = await self.rule_repo.create(rule)
        logger.info("Category rule created", extra={"user_id": str(user_id), "rule_id": str(rule.id)})
        return rule

    async def update_rule(
        self, user_id: UUID, rule_id: UUID, payload: CategoryRuleUpdate
    ) -> CategoryRule:
        """
        Raises:
            NotFoundError: Rule missing or owned by another user
            ValidationError: Same checks as create, on the provided fields
        """
        rule = await self.rule_repo.get_by_user(user_id, rule_id)
        if rule is None:
            raise NotFoundError("RULE_001", {"rule_id": str(rule_id)})

        # Explicit nulls mean "leave unchanged"; every stored column is required.
        data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if "applies_to" in data:
            if not data["applies_to"]:
                raise ValidationError("RULE_003")
            data["applies_to"] = list(data["applies_to"])
        if "category_id" in data:
            await self._check_category(user_id, data["category_id"])

        return await self.rule_repo.apply(rule, data)

    async def delete_rule(self, user_id: UUID, rule_id: UUID) -> None:
        """Delete a rule.

        A rule that no longer exists counts as deleted; one that belongs to
        another user is reported as not found.
        """
        rule = await self.rule_repo.get_by_id(rule_id)
        if rule is None:
            return
        if rule.user_id != user_id:
            raise NotFoundError("RULE_001", {"rule_id": str(rule_id)})
        await self.rule_repo.delete(rule)

    async def evaluate(self, user_id: UUID, request: RuleEvaluationRequest) -> RuleEvaluationResult:
        """Preview which rule (if any) would categorize the given record.

        Raises:
            RuleEvaluationError: If the rules cannot be loaded
        """
        rule = await self.evaluator.find_matching_rule(
            user_id, request.transaction_type, request.fields.model_dump()
        )
        if rule is None:
            return RuleEvaluationResult(matched=False)
        return RuleEvaluationResult(
            matched=True,
            category_id=rule.category_id,
            rule_id=rule.id,
            rule_name=rule.name,
        )
