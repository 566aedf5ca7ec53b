"""
Credential Policy

Turns passwords into stored secrets, verifies candidates and keeps the
brute-force lockout counter on the account row.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

import bcrypt

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.domain.base import utc_now
from src.domain.entities import Account
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes and rejects longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


class CredentialPolicy:
    """
    Password storage and login-attempt policy.

    Business Rules:
    - Passwords are at least MIN_PASSWORD_LENGTH characters (8) and at most
      72 bytes once UTF-8 encoded
    - Hashes are bcrypt with a fresh salt per call (cost BCRYPT_ROUNDS)
    - Candidates are compared with bcrypt.checkpw, never by equality
    - MAX_LOGIN_ATTEMPTS (5) consecutive failures lock the account for
      LOCK_DURATION_MINUTES (30)
    - A failure reported while locked is refused with ACCOUNT_LOCKED
    """

    def __init__(
        self,
        rounds: Optional[int] = None,
        min_password_length: Optional[int] = None,
        max_login_attempts: Optional[int] = None,
        lock_duration: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.rounds = rounds or ApplicationConfig.BCRYPT_ROUNDS
        self.min_password_length = (
            min_password_length or ApplicationConfig.MIN_PASSWORD_LENGTH
        )
        self.max_login_attempts = (
            max_login_attempts or ApplicationConfig.MAX_LOGIN_ATTEMPTS
        )
        self.lock_duration = lock_duration or timedelta(
            minutes=ApplicationConfig.LOCK_DURATION_MINUTES
        )
        self.clock = clock
        self._dummy_hash: Optional[bytes] = None

    def validate_password(self, plaintext: str) -> Result[None]:
        if not plaintext:
            return Return.err(Error(ErrorCode.VALIDATION_ERROR, "Password is required"))

        if len(plaintext) < self.min_password_length:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    f"Password must be at least {self.min_password_length} characters long",
                )
            )

        if len(plaintext.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long",
                )
            )

        return Return.ok(None)

    def hash_password(self, plaintext: str) -> str:
        return bcrypt.hashpw(
            plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds)
        ).decode("utf-8")

    def set_password(self, account: Account, plaintext: str) -> Result[Account]:
        """
        Validate and store a new password on the account.

        The account is left untouched when validation fails.
        """
        validation = self.validate_password(plaintext)
        if validation.is_err():
            return Return.err(validation.error)

        account.password_hash = self.hash_password(plaintext)
        account.password_changed_at = self.clock()
        return Return.ok(account)

    def verify_password(self, account: Account, candidate: str) -> bool:
        if not candidate or not account.password_hash:
            return False
        try:
            return bcrypt.checkpw(
                candidate.encode("utf-8"), account.password_hash.encode("utf-8")
            )
        except ValueError:
            # Malformed stored hash or over-long candidate
            logger.warning("Password check failed for account %s", account.id)
            return False

    def verify_dummy(self, candidate: str) -> bool:
        """Spend the same bcrypt work as a real check when no account matched"""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"dummy_password", bcrypt.gensalt(self.rounds)
            )
        try:
            bcrypt.checkpw((candidate or "").encode("utf-8"), self._dummy_hash)
        except ValueError:
            pass
        return False

    def is_locked(self, account: Account) -> bool:
        return account.is_locked(self.clock())

    def record_failed_attempt(self, account: Account) -> Result[Account]:
        now = self.clock()
        if account.is_locked(now):
            return Return.err(
                Error(
                    ErrorCode.ACCOUNT_LOCKED,
                    "Account is temporarily locked. Try again later",
                )
            )

        # An elapsed lock starts a fresh window
        if account.lock_until is not None:
            account.login_attempts = 0
            account.lock_until = None

        account.login_attempts = (account.login_attempts or 0) + 1
        if account.login_attempts >= self.max_login_attempts:
            account.lock_until = now + self.lock_duration
            logger.warning(
                "Account %s locked after %d failed login attempts",
                account.id,
                account.login_attempts,
            )

        return Return.ok(account)

    def record_successful_login(self, account: Account) -> Account:
        account.login_attempts = 0
        account.lock_until = None
        return account
