"""
Load Account Use Case

Resolves the account behind a bearer token.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from .dtos import AccountInfo


class LoadAccountUseCase:
    """
    Use case for loading the current account from JWT claims.

    Business Rules:
    - Account must still exist
    - Tokens issued before the last password change are rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, issued_at: int) -> Result[AccountInfo]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(self._invalid_token())

            if account.password_changed_after(issued_at):
                return Return.err(self._invalid_token())

            return Return.ok(AccountInfo.from_account(account))

    @staticmethod
    def _invalid_token() -> Error:
        return Error(ErrorCode.INVALID_TOKEN, "Invalid or expired token")
