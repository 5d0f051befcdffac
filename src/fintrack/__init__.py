"""fintrack: personal finance API with rule-based transaction categorization."""

__version__ = "0.1.0"
