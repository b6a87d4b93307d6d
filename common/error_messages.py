"""
User-friendly error messages and status codes.

This module provides centralized error message definitions that are
user-friendly and avoid exposing technical implementation details.
"""
from typing import Tuple, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for different types of failures."""

    # Validation Errors (400)
    INVALID_IMAGE_DATA = "INVALID_IMAGE_DATA"

    # External API Errors (502, 503)
    GEMINI_RATE_LIMIT = "GEMINI_RATE_LIMIT"

    # Generation Errors (502)
    IMAGE_GENERATION_FAILED = "IMAGE_GENERATION_FAILED"

    # Configuration Errors (500)
    MISSING_API_KEY = "MISSING_API_KEY"

    # Generic Errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# User-friendly error messages mapped to error codes.
# Generation failures return the model's own error text, so they carry a
# status code only.
ERROR_MESSAGES = {
    ErrorCode.INVALID_IMAGE_DATA: "The image data provided is invalid or corrupted. Please try with a different image.",

    ErrorCode.MISSING_API_KEY: "The service is not properly configured. Please contact support.",

    ErrorCode.UNKNOWN_ERROR: "Something unexpected happened. Please try again.",
}


# HTTP status codes for each error type
ERROR_STATUS_CODES = {
    ErrorCode.INVALID_IMAGE_DATA: 400,

    ErrorCode.GEMINI_RATE_LIMIT: 503,

    ErrorCode.IMAGE_GENERATION_FAILED: 502,

    ErrorCode.MISSING_API_KEY: 500,

    ErrorCode.UNKNOWN_ERROR: 500,
}


def get_status_code(error_code: ErrorCode) -> int:
    """HTTP status code for an error code, 500 when unmapped."""
    return ERROR_STATUS_CODES.get(error_code, 500)


def get_error_response(error_code: ErrorCode) -> Tuple[str, int]:
    """
    Get user-friendly error message and HTTP status code.

    Args:
        error_code: The error code enum

    Returns:
        Tuple of (error_message, status_code)
    """
    message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])
    return message, get_status_code(error_code)


def format_error_detail(error_code: ErrorCode, detail: Optional[str] = None) -> str:
    """
    Format error detail for API response.

    Args:
        error_code: The error code enum
        detail: Optional additional detail

    Returns:
        Formatted error message
    """
    base_message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])

    if detail:
        return f"{base_message} ({detail})"

    return base_message
