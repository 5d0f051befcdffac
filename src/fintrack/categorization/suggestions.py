"""Category suggestions learned from previously categorized text.

Each training example pairs a piece of transaction text with the category
the user filed it under. A new transaction's text is compared with every
example by word-level Jaccard similarity. Examples whose text neither
contains nor is contained in the new text score zero. Similar examples vote
for their category, and votes from the same transaction type count 1.2
times. The best few categories are returned with their accumulated score.

Pure: no database access. Persisting suggestions lives in
``fintrack.services.category_suggestion``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, NamedTuple, Protocol
from uuid import UUID

__all__ = [
    "MAX_SUGGESTIONS",
    "SIMILARITY_THRESHOLD",
    "SOURCE_TYPE_WEIGHT",
    "ScoredCategory",
    "TrainingExample",
    "score_categories",
    "text_similarity",
    "transaction_text",
]

SIMILARITY_THRESHOLD = 0.1
SOURCE_TYPE_WEIGHT = 1.2
MAX_SUGGESTIONS = 3

# Checked in order; the first non-empty one names the transaction.
_TEXT_FIELDS = ("merchant", "goal_name", "bill_name", "investment_type", "note", "description")


class TrainingExample(Protocol):
    transaction_text: str
    category_id: UUID
    source_type: str


class ScoredCategory(NamedTuple):
    category_id: UUID
    score: float


def transaction_text(fields: Mapping[str, Any]) -> str:
    """Text used to learn from and suggest for a transaction."""
    for name in _TEXT_FIELDS:
        value = fields.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def text_similarity(text: str, other: str) -> float:
    """Word-level Jaccard similarity, or 0 unless one text contains the other.

    Case-insensitive.
    """
    text, other = text.lower(), other.lower()
    if text not in other and other not in text:
        return 0.0

    words, other_words = set(text.split()), set(other.split())
    union = words | other_words
    if not union:
        return 0.0
    return len(words & other_words) / len(union)


def score_categories(
    text: str,
    transaction_type: str,
    examples: Iterable[TrainingExample],
    limit: int = MAX_SUGGESTIONS,
) -> list[ScoredCategory]:
    """Rank categories for ``text`` by summed similarity to the training examples.

    Only examples with similarity above SIMILARITY_THRESHOLD vote. Equal
    scores keep the order in which their categories were first seen.

    Returns:
        At most ``limit`` categories, best first. Empty for empty text.
    """
    if not text or not text.strip():
        return []

    scores: dict[UUID, float] = {}
    for example in examples:
        similarity = text_similarity(text, example.transaction_text)
        if similarity <= SIMILARITY_THRESHOLD:
            continue
        weight = SOURCE_TYPE_WEIGHT if example.source_type == transaction_type else 1.0
        scores[example.category_id] = scores.get(example.category_id, 0.0) + similarity * weight

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [ScoredCategory(category_id, score) for category_id, score in ranked[:limit]]
