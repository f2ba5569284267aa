"""Error codes and constructors shared by use cases"""

from typing import Optional
from libs.result import Error


class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    EXCHANGE_RATE_NOT_FOUND = "EXCHANGE_RATE_NOT_FOUND"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    CANNOT_EDIT = "CANNOT_EDIT"
    CANNOT_DELETE = "CANNOT_DELETE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    PAYMENT_NOT_ALLOWED = "PAYMENT_NOT_ALLOWED"

    DATABASE_ERROR = "DATABASE_ERROR"


NOT_FOUND_CODES = frozenset({
    ErrorCode.ORGANIZATION_NOT_FOUND,
    ErrorCode.INVOICE_NOT_FOUND,
    ErrorCode.CUSTOMER_NOT_FOUND,
    ErrorCode.PAYMENT_NOT_FOUND,
    ErrorCode.EXCHANGE_RATE_NOT_FOUND,
})

CONFLICT_CODES = frozenset({
    ErrorCode.CANNOT_EDIT,
    ErrorCode.CANNOT_DELETE,
    ErrorCode.INVALID_STATUS_TRANSITION,
    ErrorCode.PAYMENT_NOT_ALLOWED,
})


def not_found(code: str, resource: str, resource_id: str) -> Error:
    return Error(
        code=code,
        message=f"{resource} {resource_id} not found",
        reason=f"{resource} does not exist or belongs to another organization",
    )


def database_error(operation: str, reason: Optional[str] = None) -> Error:
    """Generic persistence failure; never carries storage-engine detail"""
    return Error(
        code=ErrorCode.DATABASE_ERROR,
        message=f"Failed to {operation}",
        reason=reason or "Internal error",
    )
