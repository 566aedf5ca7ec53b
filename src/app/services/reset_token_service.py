"""
Reset Token Service

Issues and redeems single-use, time-limited password reset tokens.
Only the SHA-256 digest of a token is ever stored.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from config import ApplicationConfig
from libs.result import Error, Result, Return
from src.app.repositories.account_repository import IAccountRepository
from src.app.services.credential_policy import CredentialPolicy
from src.domain.base import utc_now
from src.domain.entities import Account
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

RESET_TOKEN_BYTES = 32


class ResetTokenService:
    """
    Password reset token lifecycle.

    Business Rules:
    - Token is 32 random bytes, hex encoded for the reset link
    - Stored as SHA-256 hex digest, plaintext goes only to the email
    - Expires after RESET_TOKEN_TTL_MINUTES (15)
    - At most one pending token per account: issuing again replaces it
    - Redeeming clears the token, so a second redemption fails
    - A rejected new password leaves the token valid
    """

    def __init__(
        self,
        credential_policy: Optional[CredentialPolicy] = None,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.credential_policy = credential_policy or CredentialPolicy(clock=clock)
        self.ttl = ttl or timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES)
        self.clock = clock

    @staticmethod
    def hash_token(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def issue(self, account: Account) -> str:
        """
        Attach a fresh reset token to the account.

        Returns:
            The plaintext token, to be delivered by email and never stored
        """
        token = secrets.token_hex(RESET_TOKEN_BYTES)
        account.reset_token_hash = self.hash_token(token)
        account.reset_token_expires_at = self.clock() + self.ttl
        return token

    async def redeem(
        self, accounts: IAccountRepository, token: str, new_password: str
    ) -> Result[Account]:
        """
        Consume a reset token and set the new password.

        Args:
            accounts: Account repository used for lookup and persistence
            token: Plaintext token from the reset link
            new_password: Password to set

        Returns:
            Result with the updated Account, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: unknown, replaced, expired or used token
            - VALIDATION_ERROR: new password rejected (token stays valid)
        """
        if not token:
            return Return.err(self._invalid_token())

        now = self.clock()
        account = await accounts.get_by_reset_token_hash(self.hash_token(token), now)
        if account is None or not account.has_pending_reset_token(now):
            return Return.err(self._invalid_token())

        password_result = self.credential_policy.set_password(account, new_password)
        if password_result.is_err():
            return Return.err(password_result.error)

        account.clear_reset_token()
        account = await accounts.update(account)

        logger.info("Password reset completed for account %s", account.id)
        return Return.ok(account)

    @staticmethod
    def _invalid_token() -> Error:
        return Error(
            ErrorCode.INVALID_OR_EXPIRED_TOKEN,
            "Invalid or expired password reset token",
        )
