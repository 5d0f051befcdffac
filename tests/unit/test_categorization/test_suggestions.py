from types import SimpleNamespace
from uuid import uuid4

import pytest

from fintrack.categorization.suggestions import (
    MAX_SUGGESTIONS,
    score_categories,
    text_similarity,
    transaction_text,
)

TRANSPORT = uuid4()
FOOD = uuid4()
BILLS = uuid4()
FUN = uuid4()


def example(text: str, category_id=TRANSPORT, source_type: str = "expense"):
    return SimpleNamespace(transaction_text=text, category_id=category_id, source_type=source_type)


class TestTextSimilarity:
    def test_jaccard_of_words(self) -> None:
        assert text_similarity("Uber Eats", "uber") == pytest.approx(0.5)

    def test_identical_text(self) -> None:
        assert text_similarity("Netflix", "NETFLIX") == 1.0

    def test_requires_containment(self) -> None:
        # Same words, but neither string contains the other.
        assert text_similarity("coffee shop", "shop coffee") == 0.0

    def test_substring_counts_whole_words(self) -> None:
        # "eats ord" is inside the text, but "ord" is not one of its words.
        assert text_similarity("uber eats order", "eats ord") == pytest.approx(0.25)

    def test_unrelated(self) -> None:
        assert text_similarity("Starbucks", "Uber") == 0.0


class TestScoreCategories:
    def test_matching_source_type_weighted(self) -> None:
        ranked = score_categories("uber trip", "expense", [example("uber")])

        assert ranked == [(TRANSPORT, pytest.approx(0.6))]

    def test_other_source_type_unweighted(self) -> None:
        ranked = score_categories("uber trip", "income", [example("uber")])

        assert ranked[0].score == pytest.approx(0.5)

    def test_scores_accumulate_per_category(self) -> None:
        examples = [example("uber"), example("uber trip"), example("uber", FOOD, "income")]

        ranked = score_categories("uber trip", "income", examples)

        # Transport: 0.5 + 1.0, Food: 0.5 * 1.2
        assert [r.category_id for r in ranked] == [TRANSPORT, FOOD]
        assert ranked[0].score == pytest.approx(1.5)
        assert ranked[1].score == pytest.approx(0.6)

    def test_similarity_at_threshold_does_not_vote(self) -> None:
        ten_words = "a b c d e f g h i uber"
        nine_words = "a b c d e f g h uber"

        assert score_categories(ten_words, "income", [example("uber")]) == []
        assert len(score_categories(nine_words, "income", [example("uber")])) == 1

    def test_keeps_top_three(self) -> None:
        examples = [
            example("cinema", FUN),
            example("cinema tickets", BILLS),
            example("cinema tickets online", FOOD),
            example("cinema tickets online now", TRANSPORT),
        ]

        ranked = score_categories("cinema tickets online now", "income", examples)

        assert len(ranked) == MAX_SUGGESTIONS
        assert [r.category_id for r in ranked] == [TRANSPORT, FOOD, BILLS]

    def test_ties_keep_first_seen_order(self) -> None:
        examples = [example("netflix", FUN), example("netflix", BILLS)]

        ranked = score_categories("netflix", "expense", examples)

        assert [r.category_id for r in ranked] == [FUN, BILLS]

    def test_empty_text_suggests_nothing(self) -> None:
        assert score_categories("   ", "expense", [example("uber")]) == []

    def test_no_training_data(self) -> None:
        assert score_categories("uber", "expense", []) == []


class TestTransactionText:
    def test_merchant_first(self) -> None:
        assert transaction_text({"merchant": "Uber", "note": "ride home"}) == "Uber"

    def test_falls_back_past_blank_fields(self) -> None:
        fields = {"merchant": "  ", "note": None, "description": "Monthly rent"}
        assert transaction_text(fields) == "Monthly rent"

    def test_named_transactions(self) -> None:
        assert transaction_text({"bill_name": "Electricity"}) == "Electricity"
        assert transaction_text({"goal_name": "Vacation fund"}) == "Vacation fund"

    def test_nothing_to_use(self) -> None:
        assert transaction_text({}) == ""
