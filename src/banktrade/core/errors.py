"""Error codes and user-friendly messages.

Each catalog entry has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the same request could succeed later
"""

ERROR_CATALOG: dict[str, dict] = {
    "TXN_000": {
        "code": "TXN_000",
        "message": "Transaction store error",
        "user_message": "We couldn't process this transaction.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": False,
    },
    "TXN_001": {
        "code": "TXN_001",
        "message": "Transaction field failed validation",
        "user_message": "Some transaction details are missing or invalid.",
        "suggestion": "Provide a description, a positive amount, a type of INCOME or EXPENSE, and a category.",
        "retry_allowed": False,
    },
    "TXN_002": {
        "code": "TXN_002",
        "message": "Duplicate transaction",
        "user_message": "An identical transaction already exists.",
        "suggestion": "Change the description, amount, type or category and try again.",
        "retry_allowed": False,
    },
    "TXN_003": {
        "code": "TXN_003",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please check the transaction ID and try again.",
        "retry_allowed": False,
    },
    "API_001": {
        "code": "API_001",
        "message": "Route not found",
        "user_message": "This address doesn't exist.",
        "suggestion": "Check the URL against the API documentation at /docs.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "Method not allowed",
        "user_message": "This address doesn't support that request method.",
        "suggestion": "Use one of the methods listed in the Allow header.",
        "retry_allowed": False,
    },
    "API_000": {
        "code": "API_000",
        "message": "HTTP error",
        "user_message": "The request could not be completed.",
        "suggestion": "Please check your request and try again.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
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

    Unknown codes resolve to a generic definition rather than raising.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
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


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
