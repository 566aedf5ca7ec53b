"""
Error codes returned by the application layer.

Codes are stable strings so API responses and clients can match on them.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Kinds of failure a use case can report"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    # Unknown email and wrong password share this code
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    INVALID_TOKEN = "INVALID_TOKEN"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
