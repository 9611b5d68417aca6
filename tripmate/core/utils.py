"""
Utility functions for the application.
"""
from typing import Any, Dict
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary value to cents for display."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
