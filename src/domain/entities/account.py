"""
Account Entity

The single persisted record behind registration, login and password reset.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import to_epoch_seconds, utc_now


class Account(SQLModel, table=True):
    """
    Account entity - one login identity.

    Business Rules:
    - Email is stored lower-cased and is unique across accounts
    - password_hash is a bcrypt hash with its salt embedded; raw passwords
      are never stored
    - reset_token_hash / reset_token_expires_at are set and cleared together
    - lock_until only blocks login while it is in the future
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(max_length=30)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Brute-force lockout
    login_attempts: int = Field(default=0)
    lock_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Pending password reset (SHA-256 hex of the emailed token)
    reset_token_hash: Optional[str] = Field(default=None, index=True, max_length=64)
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    is_active: bool = Field(default=True)
    is_verified: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    def is_locked(self, now: datetime) -> bool:
        return self.lock_until is not None and self.lock_until > now

    def has_pending_reset_token(self, now: datetime) -> bool:
        return (
            self.reset_token_hash is not None
            and self.reset_token_expires_at is not None
            and self.reset_token_expires_at > now
        )

    def clear_reset_token(self) -> None:
        self.reset_token_hash = None
        self.reset_token_expires_at = None

    def password_changed_after(self, issued_at: int) -> bool:
        """True if the password changed after a token issued at ``issued_at`` (epoch seconds)"""
        if self.password_changed_at is None:
            return False
        return to_epoch_seconds(self.password_changed_at) > issued_at
