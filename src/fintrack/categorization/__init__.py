"""Transaction categorization.

Rule evaluation is local and deterministic: a user's category rules are
loaded once and matched in memory against the transaction's text fields.
Suggestions rank categories by text similarity to what the user has
categorized before.
"""

from .rules import evaluate, find_first_match, rule_matches
from .suggestions import score_categories

__all__ = ["evaluate", "find_first_match", "rule_matches", "score_categories"]
