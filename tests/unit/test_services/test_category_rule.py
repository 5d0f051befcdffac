"""Unit tests for CategoryRuleService and CategoryService business rules."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import ConflictError, NotFoundError, ValidationError
from fintrack.models.category import Category
from fintrack.schemas.category import CategoryCreate, CategoryUpdate
from fintrack.schemas.category_rule import CategoryRuleCreate, CategoryRuleUpdate
from fintrack.services.category import DEFAULT_CATEGORIES, CategoryService
from fintrack.services.category_rule import CategoryRuleService


@pytest.fixture
def mock_db():
    db = AsyncMock(spec=AsyncSession)
    db.commit = AsyncMock()
    return db


@pytest.fixture
def rule_service(mock_db):
    service = CategoryRuleService(mock_db)
    service.rule_repo = Mock()
    service.rule_repo.create = AsyncMock(side_effect=lambda rule: rule)
    service.rule_repo.apply = AsyncMock(side_effect=lambda rule, data: rule)
    service.rule_repo.delete = AsyncMock()
    service.category_repo = Mock()
    service.category_repo.get_by_user = AsyncMock(return_value=Mock())
    return service


def create_payload(**overrides):
    data = {
        "name": "Rideshare",
        "match_field": "merchant",
        "match_operator": "contains",
        "match_value": "uber",
        "category_id": uuid4(),
        "applies_to": ["expense"],
    }
    data.update(overrides)
    return CategoryRuleCreate(**data)


class TestCreateRule:
    @pytest.mark.asyncio
    async def test_priority_defaults_to_one(self, rule_service):
        rule = await rule_service.create_rule(uuid4(), create_payload())

        assert rule.priority == 1
        assert rule.is_active is True
        assert rule.applies_to == ["expense"]

    @pytest.mark.asyncio
    async def test_empty_applies_to_rejected(self, rule_service):
        with pytest.raises(ValidationError) as exc_info:
            await rule_service.create_rule(uuid4(), create_payload(applies_to=[]))

        assert exc_info.value.error_code == "RULE_003"

    @pytest.mark.asyncio
    async def test_category_must_belong_to_user(self, rule_service):
        rule_service.category_repo.get_by_user = AsyncMock(return_value=None)

        with pytest.raises(ValidationError) as exc_info:
            await rule_service.create_rule(uuid4(), create_payload())

        assert exc_info.value.error_code == "RULE_002"
        rule_service.rule_repo.create.assert_not_called()


class TestUpdateRule:
    @pytest.mark.asyncio
    async def test_missing_rule(self, rule_service):
        rule_service.rule_repo.get_by_user = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError):
            await rule_service.update_rule(uuid4(), uuid4(), CategoryRuleUpdate(priority=3))

    @pytest.mark.asyncio
    async def test_only_provided_fields_applied(self, rule_service):
        rule = Mock()
        rule_service.rule_repo.get_by_user = AsyncMock(return_value=rule)

        await rule_service.update_rule(
            uuid4(), uuid4(), CategoryRuleUpdate(priority=3, is_active=None)
        )

        rule_service.rule_repo.apply.assert_awaited_once_with(rule, {"priority": 3})

    @pytest.mark.asyncio
    async def test_empty_applies_to_rejected(self, rule_service):
        rule_service.rule_repo.get_by_user = AsyncMock(return_value=Mock())

        with pytest.raises(ValidationError):
            await rule_service.update_rule(uuid4(), uuid4(), CategoryRuleUpdate(applies_to=[]))


class TestDeleteRule:
    @pytest.mark.asyncio
    async def test_missing_rule_is_success(self, rule_service):
        rule_service.rule_repo.get_by_id = AsyncMock(return_value=None)

        await rule_service.delete_rule(uuid4(), uuid4())

        rule_service.rule_repo.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_users_rule_not_found(self, rule_service):
        rule_service.rule_repo.get_by_id = AsyncMock(return_value=Mock(user_id=uuid4()))

        with pytest.raises(NotFoundError):
            await rule_service.delete_rule(uuid4(), uuid4())

        rule_service.rule_repo.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_own_rule_deleted(self, rule_service):
        user_id = uuid4()
        rule = Mock(user_id=user_id)
        rule_service.rule_repo.get_by_id = AsyncMock(return_value=rule)

        await rule_service.delete_rule(user_id, uuid4())

        rule_service.rule_repo.delete.assert_awaited_once_with(rule)


@pytest.fixture
def category_service(mock_db):
    service = CategoryService(mock_db)
    service.category_repo = Mock()
    service.category_repo.create = AsyncMock(side_effect=lambda c: c)
    service.category_repo.apply = AsyncMock(side_effect=lambda c, data: c)
    return service


class TestCategoryService:
    @pytest.mark.asyncio
    async def test_duplicate_name_conflict(self, category_service):
        category_service.category_repo.get_by_name = AsyncMock(return_value=Mock())

        with pytest.raises(ConflictError) as exc_info:
            await category_service.create_category(uuid4(), CategoryCreate(name="Food"))

        assert exc_info.value.error_code == "CAT_002"

    @pytest.mark.asyncio
    async def test_cannot_be_own_parent(self, category_service):
        user_id, category_id = uuid4(), uuid4()
        category_service.category_repo.get_by_user = AsyncMock(
            return_value=Category(id=category_id, user_id=user_id, name="Food")
        )

        with pytest.raises(ValidationError) as exc_info:
            await category_service.update_category(
                user_id, category_id, CategoryUpdate(parent_category_id=category_id)
            )

        assert exc_info.value.error_code == "CAT_003"

    @pytest.mark.asyncio
    async def test_parent_cycle_rejected(self, category_service):
        user_id = uuid4()
        parent = Category(id=uuid4(), user_id=user_id, name="Parent")
        child = Category(id=uuid4(), user_id=user_id, name="Child", parent_category_id=parent.id)
        by_id = {parent.id: parent, child.id: child}
        category_service.category_repo.get_by_user = AsyncMock(
            side_effect=lambda uid, cid: by_id.get(cid)
        )

        # Making the parent a child of its own child closes a loop.
        with pytest.raises(ValidationError):
            await category_service.update_category(
                user_id, parent.id, CategoryUpdate(parent_category_id=child.id)
            )

    @pytest.mark.asyncio
    async def test_defaults_only_create_missing(self, category_service):
        user_id = uuid4()
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        existing = [
            Category(
                id=uuid4(),
                user_id=user_id,
                name="Groceries",
                is_temporary=False,
                created_at=now,
                updated_at=now,
            )
        ]
        category_service.category_repo.get_all_by_user = AsyncMock(return_value=existing)
        category_service.category_repo.create_many = AsyncMock(side_effect=lambda items: items)

        created, _ = await category_service.ensure_default_categories(user_id)

        assert created == len(DEFAULT_CATEGORIES) - 1
        names = {c.name for c in category_service.category_repo.create_many.await_args.args[0]}
        assert "Groceries" not in names
