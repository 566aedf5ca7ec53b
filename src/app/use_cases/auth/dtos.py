"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from pydantic import BaseModel

from src.domain.entities import Account


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents registration intent

    Created by API layer after request parsing.
    Field rules are enforced by the use case, not here.
    """

    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public account fields; never carries secrets"""

    id: str
    username: str
    email: str
    is_active: bool
    is_verified: bool
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountInfo":
        return cls(
            id=str(account.id),
            username=account.username,
            email=account.email,
            is_active=account.is_active,
            is_verified=account.is_verified,
            created_at=account.created_at,
        )


class RegisterResponse(BaseModel):
    """Response for register use case"""

    access_token: str
    token_type: str = "bearer"
    account: AccountInfo


class LoginResponse(BaseModel):
    """Response for login use case"""

    access_token: str
    token_type: str = "bearer"
    account: AccountInfo


class ForgotPasswordResponse(BaseModel):
    """Response for forgot password use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
