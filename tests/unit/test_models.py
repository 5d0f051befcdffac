"""Unit tests for model helpers and settings."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import Settings
from fintrack.models.category_rule import MATCH_FIELDS
from fintrack.models.transaction import Transaction
from fintrack.models.user import User
from fintrack.repositories.base import BaseRepository
from fintrack.repositories.user import UserRepository


class TestTransactionMatchFields:
    def test_keys_follow_rule_vocabulary(self):
        fields = Transaction(merchant="Uber", bill_name="Power").match_fields()

        assert tuple(fields) == MATCH_FIELDS

    def test_values_read_from_columns(self):
        fields = Transaction(merchant="Uber", bill_name="Power").match_fields()

        assert fields["merchant"] == "Uber"
        assert fields["bill_name"] == "Power"
        assert fields["note"] is None


class TestUserRepository:
    @pytest.fixture
    def mock_db(self):
        return AsyncMock(spec=AsyncSession)

    @pytest.mark.asyncio
    async def test_deactivate_sets_flag(self, mock_db):
        user = User(id=uuid4(), email="a@example.com", full_name="A", is_active=True)
        repo = UserRepository(mock_db)
        repo.get_by_id = AsyncMock(return_value=user)

        result = await repo.deactivate(user.id)

        assert result is user
        assert user.is_active is False
        mock_db.commit.assert_awaited_once()
        mock_db.refresh.assert_awaited_once_with(user)

    @pytest.mark.asyncio
    async def test_deactivate_missing_user(self, mock_db):
        repo = UserRepository(mock_db)
        repo.get_by_id = AsyncMock(return_value=None)

        assert await repo.deactivate(uuid4()) is None
        mock_db.commit.assert_not_called()

    def test_records_change_through_apply_only(self):
        assert not hasattr(BaseRepository, "update")


class TestSettings:
    def test_no_server_binding_settings(self):
        assert "host" not in Settings.model_fields
        assert "port" not in Settings.model_fields

    def test_rule_priority_default(self):
        assert Settings.model_fields["default_rule_priority"].default == 1
