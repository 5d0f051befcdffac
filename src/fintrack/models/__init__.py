"""Database models."""
from fintrack.models.user import User
from fintrack.models.category import Category
from fintrack.models.category_rule import CategoryRule
from fintrack.models.transaction import Transaction
from fintrack.models.category_split import TransactionCategorySplit
from fintrack.models.category_suggestion import CategorySuggestion, CategoryTrainingData

__all__ = [
    "User",
    "Category",
    "CategoryRule",
    "Transaction",
    "TransactionCategorySplit",
    "CategorySuggestion",
    "CategoryTrainingData",
]
