"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

from dataclasses import dataclass


@dataclass
class ErrorDefinition:
    """Definition of a single error type."""

    code: str
    message: str
    user_message: str
    suggestion: str
    retry_allowed: bool


ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Email already registered",
        "user_message": "An account with this email already exists.",
        "suggestion": "Log in instead, or register with a different email.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Incorrect email or password",
        "user_message": "Incorrect email or password.",
        "suggestion": "Check your credentials and try again.",
        "retry_allowed": True,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "User account is deactivated",
        "user_message": "This account has been deactivated.",
        "suggestion": "Contact support to reactivate your account.",
        "retry_allowed": False,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "Invalid or expired refresh token",
        "user_message": "Your session has expired.",
        "suggestion": "Please log in again.",
        "retry_allowed": False,
    },
    "CAT_001": {
        "code": "CAT_001",
        "message": "Category not found",
        "user_message": "We couldn't find this category.",
        "suggestion": "Please refresh and choose one of your categories.",
        "retry_allowed": False,
    },
    "CAT_002": {
        "code": "CAT_002",
        "message": "Category name already exists for user",
        "user_message": "You already have a category with this name.",
        "suggestion": "Choose a different name.",
        "retry_allowed": False,
    },
    "CAT_003": {
        "code": "CAT_003",
        "message": "Invalid parent category",
        "user_message": "That parent category can't be used.",
        "suggestion": "Pick a different parent, or leave it empty.",
        "retry_allowed": False,
    },
    "RULE_001": {
        "code": "RULE_001",
        "message": "Category rule not found",
        "user_message": "We couldn't find this rule.",
        "suggestion": "Please refresh the rule list and try again.",
        "retry_allowed": False,
    },
    "RULE_002": {
        "code": "RULE_002",
        "message": "Rule references a category the user does not own",
        "user_message": "The selected category isn't available.",
        "suggestion": "Choose one of your own categories for this rule.",
        "retry_allowed": False,
    },
    "RULE_003": {
        "code": "RULE_003",
        "message": "Rule must apply to at least one transaction type",
        "user_message": "Pick at least one transaction type for this rule.",
        "suggestion": "Select expense, income, goal, bill or investment.",
        "retry_allowed": False,
    },
    "RULE_004": {
        "code": "RULE_004",
        "message": "Category rules could not be loaded for evaluation",
        "user_message": "We couldn't check your category rules right now.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Transaction references a category the user does not own",
        "user_message": "The selected category isn't available.",
        "suggestion": "Choose one of your own categories.",
        "retry_allowed": False,
    },
    "SPLIT_001": {
        "code": "SPLIT_001",
        "message": "Category split not found",
        "user_message": "We couldn't find this split.",
        "suggestion": "Please refresh the transaction and try again.",
        "retry_allowed": False,
    },
    "SPLIT_002": {
        "code": "SPLIT_002",
        "message": "Split references a category the user does not own",
        "user_message": "The selected category isn't available.",
        "suggestion": "Choose one of your own categories for this split.",
        "retry_allowed": False,
    },
    "SUGG_001": {
        "code": "SUGG_001",
        "message": "Category suggestion not found",
        "user_message": "We couldn't find this suggestion.",
        "suggestion": "Please refresh the suggestions and try again.",
        "retry_allowed": False,
    },
    "SUGG_002": {
        "code": "SUGG_002",
        "message": "Training data references a category the user does not own",
        "user_message": "The selected category isn't available.",
        "suggestion": "Choose one of your own categories.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Please check if the record was already created",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    return get_error(error_code)["retry_allowed"]


def error_response(error_code: str) -> dict:
    """Build the JSON body returned to API clients for a catalog error."""
    error_def = get_error(error_code)
    return {
        "error_code": error_code,
        "message": error_def["message"],
        "user_message": error_def["user_message"],
        "suggestion": error_def["suggestion"],
        "retry_allowed": error_def["retry_allowed"],
    }
