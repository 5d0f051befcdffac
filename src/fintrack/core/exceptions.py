"""Application exception classes.

Every exception carries an error_code that maps to the catalog in
errors.py, plus the HTTP status the API layer should answer with.
"""

from typing import Any


class FinanceAppError(Exception):
    """Base exception for all application errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "RULE_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class NotFoundError(FinanceAppError):
    """Raised when a user-scoped resource does not exist or is not owned by the user."""

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=404)


class ValidationError(FinanceAppError):
    """Raised when input passes schema validation but breaks a business rule.

    Examples:
    - rule references a category the user does not own
    - category set as its own parent
    """

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=400)


class ConflictError(FinanceAppError):
    """Raised when a create/update would duplicate an existing resource."""

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        super().__init__(error_code, details, http_status=409)


class RuleEvaluationError(FinanceAppError):
    """Raised by the strict evaluator path when category rules cannot be loaded."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("RULE_004", details, http_status=503)
