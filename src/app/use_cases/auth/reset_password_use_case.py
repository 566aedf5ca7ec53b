from typing import Optional

from libs.result import Result, Return
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResetPasswordResponse


class ResetPasswordUseCase:
    """
    Use case for redeeming a password reset token.

    Nothing is committed unless both the token and the new password are
    accepted.
    """

    def __init__(self, uow: UnitOfWork, reset_tokens: Optional[ResetTokenService] = None):
        self.uow = uow
        self.reset_tokens = reset_tokens or ResetTokenService()

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        async with self.uow:
            result = await self.reset_tokens.redeem(
                self.uow.accounts, token, new_password
            )
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

            return Return.ok(
                ResetPasswordResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
