"""
Login Use Case

Verifies credentials, applies the lockout policy and issues a bearer token.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.credential_policy import CredentialPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.validation import normalize_email
from .dtos import AccountInfo, LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password return the same INVALID_CREDENTIALS
      error, and both pay for a bcrypt check
    - A locked account is refused with ACCOUNT_LOCKED, even with the right
      password
    - Each wrong password is counted; reaching the limit locks the account
    - Success resets the counter and clears any lock
    """

    def __init__(self, uow: UnitOfWork, credential_policy: Optional[CredentialPolicy] = None):
        self.uow = uow
        self.credential_policy = credential_policy or CredentialPolicy()

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: Account email (any case)
            password: Plain text password

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

            if account is None:
                self.credential_policy.verify_dummy(password)
                return Return.err(self._invalid_credentials())

            if self.credential_policy.is_locked(account):
                return Return.err(
                    Error(
                        ErrorCode.ACCOUNT_LOCKED,
                        "Account is temporarily locked. Try again later",
                    )
                )

            if not self.credential_policy.verify_password(account, password):
                failure = self.credential_policy.record_failed_attempt(account)
                if failure.is_err():
                    return Return.err(failure.error)
                await self.uow.accounts.update(account)
                await self.uow.commit()
                return Return.err(self._invalid_credentials())

            self.credential_policy.record_successful_login(account)
            account = await self.uow.accounts.update(account)
            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    access_token=generate_jwt(account.id),
                    account=AccountInfo.from_account(account),
                )
            )

    @staticmethod
    def _invalid_credentials() -> Error:
        return Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")
