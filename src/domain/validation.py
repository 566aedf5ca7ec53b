"""
Account field validation shared by registration and login.
"""

import re

from email_validator import EmailNotValidError, validate_email as check_email_syntax

from libs.result import Error, Result, Return
from src.domain.errors import ErrorCode

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_username(username: str) -> Result[str]:
    """Trim and check a username: 3-30 chars of letters, digits and underscores"""
    cleaned = (username or "").strip()
    if not cleaned:
        return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Username is required"))
    if not USERNAME_MIN_LENGTH <= len(cleaned) <= USERNAME_MAX_LENGTH:
        return Return.err(
            Error(
                ErrorCode.VALIDATION_ERROR,
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters",
            )
        )
    if not USERNAME_PATTERN.match(cleaned):
        return Return.err(
            Error(
                ErrorCode.VALIDATION_ERROR,
                "Username can only contain letters, numbers and underscores",
            )
        )
    return Return.ok(cleaned)


def validate_email(email: str) -> Result[str]:
    """Normalize an email address and check its syntax"""
    cleaned = normalize_email(email)
    if not cleaned:
        return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Email is required"))
    try:
        check_email_syntax(cleaned, check_deliverability=False)
    except EmailNotValidError:
        return Return.err(
            Error(ErrorCode.VALIDATION_ERROR, "Please provide a valid email")
        )
    return Return.ok(cleaned)
