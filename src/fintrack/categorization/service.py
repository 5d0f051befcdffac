"""Database-backed category rule evaluation.

``apply_category_rules`` is what write paths call before persisting a
transaction: it never raises, and any failure degrades to "no category".
``find_matching_rule`` is the strict variant used where the caller needs to
tell "nothing matched" apart from "rules could not be loaded".
"""

import logging
from typing import Any, Mapping
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.rules import find_first_match
from fintrack.config import settings
from fintrack.core.exceptions import RuleEvaluationError
from fintrack.models.category_rule import CategoryRule
from fintrack.repositories.category_rule import CategoryRuleRepository

logger = logging.getLogger(__name__)


class CategoryRuleEvaluator:
    """Evaluates a user's stored category rules against a record."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.rule_repo = CategoryRuleRepository(db)

    async def find_matching_rule(
        self,
        user_id: UUID,
        transaction_type: str,
        fields: Mapping[str, Any],
    ) -> CategoryRule | None:
        """Return the first matching rule for the user, or None.

        Raises:
            RuleEvaluationError: If the rules cannot be loaded.
        """
        try:
            rules = await self.rule_repo.get_active_for_type(user_id, transaction_type)
        except SQLAlchemyError as exc:
            # Leave the session usable for the caller's own writes.
            await self.db.rollback()
            raise RuleEvaluationError(
                details={"transaction_type": transaction_type, "error_type": type(exc).__name__}
            ) from exc

        if not rules:
            return None
        return find_first_match(rules, transaction_type, fields)

    async def apply_category_rules(
        self,
        user_id: UUID | None,
        transaction_type: str,
        fields: Mapping[str, Any],
    ) -> UUID | None:
        """Category id of the first matching rule, or None.

        Missing user, database failure and no match all return None.
        """
        if user_id is None:
            return None

        try:
            rule = await self.find_matching_rule(user_id, transaction_type, fields)
        except RuleEvaluationError as exc:
            extra = {"error_code": exc.error_code, "user_id": str(user_id)}
            if settings.debug:
                extra["details"] = exc.details
            logger.error("Category rule evaluation failed; leaving uncategorized", extra=extra)
            return None

        if rule is None:
            return None

        logger.debug(
            "Category rule matched",
            extra={"user_id": str(user_id), "rule_id": str(rule.id)},
        )
        return rule.category_id


async def apply_category_rules(
    db: AsyncSession,
    user_id: UUID | None,
    transaction_type: str,
    fields: Mapping[str, Any],
) -> UUID | None:
    """Convenience wrapper around CategoryRuleEvaluator.apply_category_rules."""
    return await CategoryRuleEvaluator(db).apply_category_rules(user_id, transaction_type, fields)
