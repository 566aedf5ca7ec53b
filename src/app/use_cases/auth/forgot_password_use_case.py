"""
Forgot Password Use Case

Issues a password reset token and emails the reset link.
"""

import logging
from typing import Optional

from config import ApplicationConfig
from libs.result import Result, Return
from src.app.services.mail_sender import IMailSender
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.validation import normalize_email
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Password Reset Request"
GENERIC_MESSAGE = "If that email is registered, a password reset link has been sent"


def build_reset_url(token: str) -> str:
    return f"{ApplicationConfig.FRONTEND_URL.rstrip('/')}/reset-password/{token}"


def build_reset_body(reset_url: str, ttl_minutes: int) -> str:
    return (
        "You requested a password reset.\n\n"
        f"Please click the following link to reset your password: {reset_url}\n\n"
        f"This link expires in {ttl_minutes} minutes and can be used once. "
        "If you did not request a reset, you can ignore this email."
    )


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Same response whether or not the email is registered
    - Issuing replaces any pending token on the account
    - Token is committed before the email is sent, so a delivery failure
      leaves the token valid and is reported as DELIVERY_FAILED
    """

    def __init__(
        self,
        uow: UnitOfWork,
        mail_sender: IMailSender,
        reset_tokens: Optional[ResetTokenService] = None,
    ):
        self.uow = uow
        self.mail_sender = mail_sender
        self.reset_tokens = reset_tokens or ResetTokenService()

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

            if account is None:
                return Return.ok(
                    ForgotPasswordResponse(status="sent", message=GENERIC_MESSAGE)
                )

            token = self.reset_tokens.issue(account)
            await self.uow.accounts.update(account)
            await self.uow.commit()

            logger.info("Password reset token issued for account %s", account.id)

            ttl_minutes = int(self.reset_tokens.ttl.total_seconds() // 60)
            delivery = await self.mail_sender.send(
                account.email,
                RESET_EMAIL_SUBJECT,
                build_reset_body(build_reset_url(token), ttl_minutes),
            )
            if delivery.is_err():
                return Return.err(delivery.error)

            return Return.ok(
                ForgotPasswordResponse(status="sent", message=GENERIC_MESSAGE)
            )
