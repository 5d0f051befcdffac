"""Request schema validation tests."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from fintrack.schemas.auth import UserRegister
from fintrack.schemas.category import CategoryCreate
from fintrack.schemas.category_rule import (
    CategoryRuleCreate,
    CategoryRuleUpdate,
    RuleEvaluationRequest,
)
from fintrack.schemas.category_split import CategorySplitCreate
from fintrack.schemas.category_suggestion import TrainingDataCreate
from fintrack.schemas.common import build_pagination
from fintrack.schemas.transaction import TransactionCreate


def rule_payload(**overrides):
    payload = {
        "name": "Rideshare",
        "match_field": "merchant",
        "match_operator": "contains",
        "match_value": "uber",
        "category_id": str(uuid4()),
        "applies_to": ["expense"],
    }
    payload.update(overrides)
    return payload


class TestCategoryRuleCreate:
    def test_defaults(self):
        rule = CategoryRuleCreate(**rule_payload())

        assert rule.priority is None
        assert rule.is_active is True

    @pytest.mark.parametrize("field", ["match_field", "match_operator", "match_value", "category_id", "applies_to"])
    def test_required_fields(self, field):
        payload = rule_payload()
        payload.pop(field)

        with pytest.raises(ValidationError):
            CategoryRuleCreate(**payload)

    def test_rejects_unknown_operator(self):
        with pytest.raises(ValidationError):
            CategoryRuleCreate(**rule_payload(match_operator="regex"))

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            CategoryRuleCreate(**rule_payload(match_field="description"))

    def test_rejects_unknown_transaction_type(self):
        with pytest.raises(ValidationError):
            CategoryRuleCreate(**rule_payload(applies_to=["transfer"]))

    def test_whitespace_match_value_allowed(self):
        rule = CategoryRuleCreate(**rule_payload(match_value="   "))
        assert rule.match_value == "   "

    def test_rejects_empty_match_value(self):
        with pytest.raises(ValidationError):
            CategoryRuleCreate(**rule_payload(match_value=""))

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            CategoryRuleCreate(**rule_payload(name="   "))

    def test_applies_to_deduplicated(self):
        rule = CategoryRuleCreate(**rule_payload(applies_to=["expense", "bill", "expense"]))
        assert rule.applies_to == ["expense", "bill"]


class TestCategoryRuleUpdate:
    def test_only_set_fields_dumped(self):
        update = CategoryRuleUpdate(priority=7)
        assert update.model_dump(exclude_unset=True) == {"priority": 7}

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            CategoryRuleUpdate(name=" ")


def test_evaluation_request_defaults_to_empty_fields():
    request = RuleEvaluationRequest(transaction_type="income")
    assert request.fields.model_dump() == {
        "merchant": None,
        "note": None,
        "tag": None,
        "location": None,
        "goal_name": None,
        "bill_name": None,
        "investment_type": None,
    }


def test_category_name_is_stripped():
    assert CategoryCreate(name="  Travel ").name == "Travel"
    with pytest.raises(ValidationError):
        CategoryCreate(name="   ")


def test_transaction_amount_not_negative():
    with pytest.raises(ValidationError):
        TransactionCreate(transaction_type="expense", txn_date="2026-01-01", amount=-1)


def test_register_requires_long_password():
    with pytest.raises(ValidationError):
        UserRegister(email="a@example.com", password="short", full_name="A")


@pytest.mark.parametrize(
    "total,expected_pages",
    [(0, 0), (1, 1), (20, 1), (21, 2)],
)
def test_build_pagination(total, expected_pages):
    assert build_pagination(1, 20, total).total_pages == expected_pages


class TestCategorySplitCreate:
    @pytest.mark.parametrize("amount", [0, -100])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            CategorySplitCreate(category_id=uuid4(), amount=amount)

    def test_note_optional(self):
        split = CategorySplitCreate(category_id=uuid4(), amount=1)
        assert split.note is None


class TestTrainingDataCreate:
    def test_text_stripped(self):
        data = TrainingDataCreate(
            transaction_text="  Uber  ", category_id=uuid4(), source_type="expense"
        )
        assert data.transaction_text == "Uber"

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            TrainingDataCreate(transaction_text="   ", category_id=uuid4(), source_type="expense")

    def test_unknown_source_type_rejected(self):
        with pytest.raises(ValidationError):
            TrainingDataCreate(transaction_text="Uber", category_id=uuid4(), source_type="transfer")
