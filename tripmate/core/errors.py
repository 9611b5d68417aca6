"""
Custom exceptions for TripMate.

Domain code raises these instead of HTTPException so that pure services stay
independent of the web layer. The API maps them to responses in main.py.

Usage:
    from tripmate.core.errors import ValidationError, ErrorCode

    raise ValidationError("Amount must not be negative", code=ErrorCode.INVALID_AMOUNT)
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes returned alongside error messages."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    DUPLICATE_MEMBER = "DUPLICATE_MEMBER"
    EMPTY_CATALOG = "EMPTY_CATALOG"
    INVALID_TIME = "INVALID_TIME"
    INVALID_PERIOD = "INVALID_PERIOD"
    NOT_CLAIMABLE = "NOT_CLAIMABLE"
    NOT_CHECKABLE = "NOT_CHECKABLE"

    # Conflict errors
    ALREADY_CLAIMED = "ALREADY_CLAIMED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TripMateError(Exception):
    """Base exception for all TripMate errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(TripMateError):
    """Input data is malformed or violates a domain rule."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code=code)


class ConflictError(TripMateError):
    """The request clashes with another member's change."""

    pass
