"""Unit tests for the database-backed category rule evaluator."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categorization.service import CategoryRuleEvaluator, apply_category_rules
from fintrack.core.exceptions import RuleEvaluationError
from fintrack.models.category_rule import CategoryRule


@pytest.fixture
def mock_db():
    db = AsyncMock(spec=AsyncSession)
    db.rollback = AsyncMock()
    return db


def make_rule(user_id, match_value, category_id, priority=1):
    return CategoryRule(
        id=uuid4(),
        user_id=user_id,
        name=f"{match_value} rule",
        match_field="merchant",
        match_operator="contains",
        match_value=match_value,
        category_id=category_id,
        applies_to=["expense"],
        priority=priority,
        is_active=True,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


def rules_result(rules):
    result = MagicMock()
    scalars = MagicMock()
    scalars.all.return_value = rules
    result.scalars.return_value = scalars
    return result


class TestApplyCategoryRules:
    @pytest.mark.asyncio
    async def test_returns_category_of_first_match(self, mock_db):
        user_id = uuid4()
        transport, food = uuid4(), uuid4()
        mock_db.execute = AsyncMock(
            return_value=rules_result(
                [make_rule(user_id, "uber", transport, 10), make_rule(user_id, "eats", food, 5)]
            )
        )

        category_id = await CategoryRuleEvaluator(mock_db).apply_category_rules(
            user_id, "expense", {"merchant": "Uber Eats"}
        )

        assert category_id == transport

    @pytest.mark.asyncio
    async def test_no_user_returns_none_without_query(self, mock_db):
        mock_db.execute = AsyncMock()

        result = await apply_category_rules(mock_db, None, "expense", {"merchant": "Uber"})

        assert result is None
        mock_db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_rules_returns_none(self, mock_db):
        mock_db.execute = AsyncMock(return_value=rules_result([]))

        result = await apply_category_rules(mock_db, uuid4(), "expense", {"merchant": "Uber"})

        assert result is None

    @pytest.mark.asyncio
    async def test_database_failure_degrades_to_none(self, mock_db, caplog):
        mock_db.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with caplog.at_level("ERROR"):
            result = await apply_category_rules(mock_db, uuid4(), "expense", {"merchant": "Uber"})

        assert result is None
        mock_db.rollback.assert_awaited_once()
        assert any("evaluation failed" in r.getMessage() for r in caplog.records)


class TestFindMatchingRule:
    @pytest.mark.asyncio
    async def test_raises_on_database_failure(self, mock_db):
        mock_db.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(RuleEvaluationError) as exc_info:
            await CategoryRuleEvaluator(mock_db).find_matching_rule(
                uuid4(), "expense", {"merchant": "Uber"}
            )

        assert exc_info.value.error_code == "RULE_004"
        assert exc_info.value.http_status == 503
        assert exc_info.value.details["transaction_type"] == "expense"

    @pytest.mark.asyncio
    async def test_returns_the_matching_rule(self, mock_db):
        user_id = uuid4()
        rule = make_rule(user_id, "uber", uuid4())
        evaluator = CategoryRuleEvaluator(mock_db)

        with patch.object(
            evaluator.rule_repo, "get_active_for_type", AsyncMock(return_value=[rule])
        ) as loader:
            found = await evaluator.find_matching_rule(user_id, "expense", {"merchant": "UBER"})

        loader.assert_awaited_once_with(user_id, "expense")
        assert found is rule
