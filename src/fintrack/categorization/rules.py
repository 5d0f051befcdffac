"""Deterministic rule-based categorization.

A category rule names one field of a transaction (merchant, note, tag, ...),
a string operator and a value. Rules are scanned in priority order and the
first one that matches decides the category.

Matching is case-insensitive and pure: no database access, no mutation of
the rules or the record. The database-backed entry point lives in
``fintrack.categorization.service``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence
from uuid import UUID

from fintrack.models.category_rule import MATCH_FIELDS, MATCH_OPERATORS, TRANSACTION_TYPES

__all__ = [
    "MATCH_FIELDS",
    "MATCH_OPERATORS",
    "TRANSACTION_TYPES",
    "RuleLike",
    "evaluate",
    "find_first_match",
    "order_rules",
    "rule_applies_to",
    "rule_matches",
]


class RuleLike(Protocol):
    """Attributes the evaluator reads from a rule (ORM row or plain object)."""

    id: Any
    match_field: str
    match_operator: str
    match_value: str
    category_id: UUID
    applies_to: Sequence[str]
    priority: int
    is_active: bool
    created_at: datetime | None


_OPERATORS: dict[str, Callable[[str, str], bool]] = {
    "equals": lambda field, value: field == value,
    "contains": lambda field, value: value in field,
    "starts_with": lambda field, value: field.startswith(value),
    "ends_with": lambda field, value: field.endswith(value),
}

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _field_value(fields: Mapping[str, Any], match_field: str) -> str:
    if match_field not in MATCH_FIELDS:
        return ""
    value = fields.get(match_field)
    if value is None:
        return ""
    return str(value)


def rule_applies_to(rule: RuleLike, transaction_type: str) -> bool:
    """True when the rule is active and restricted to include transaction_type."""
    return bool(rule.is_active) and transaction_type in (rule.applies_to or ())


def rule_matches(rule: RuleLike, fields: Mapping[str, Any]) -> bool:
    """Check a single rule against a record's fields.

    An empty (or missing) field never matches, even when the rule's
    match_value is also empty. Unknown fields or operators never match.
    """
    field_value = _field_value(fields, rule.match_field)
    if not field_value:
        return False

    compare = _OPERATORS.get(rule.match_operator)
    if compare is None:
        return False

    return compare(field_value.lower(), (rule.match_value or "").lower())


def _sort_key(rule: RuleLike) -> tuple:
    created_at = getattr(rule, "created_at", None) or _EPOCH
    return (-int(rule.priority or 0), created_at, str(getattr(rule, "id", "")))


def order_rules(rules: Iterable[RuleLike]) -> list[RuleLike]:
    """Evaluation order: priority descending, then oldest first, then id."""
    return sorted(rules, key=_sort_key)


def find_first_match(
    rules: Iterable[RuleLike],
    transaction_type: str,
    fields: Mapping[str, Any],
) -> RuleLike | None:
    """Return the first rule, in evaluation order, that matches the record.

    Inactive rules and rules not applying to transaction_type are skipped,
    so callers may pass an unfiltered rule list.
    """
    candidates = [rule for rule in rules if rule_applies_to(rule, transaction_type)]
    for rule in order_rules(candidates):
        if rule_matches(rule, fields):
            return rule
    return None


def evaluate(
    rules: Iterable[RuleLike],
    transaction_type: str,
    fields: Mapping[str, Any],
) -> UUID | None:
    """Category id of the first matching rule, or None."""
    rule = find_first_match(rules, transaction_type, fields)
    return rule.category_id if rule is not None else None
