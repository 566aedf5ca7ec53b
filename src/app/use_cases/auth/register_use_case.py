import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.api.utils.jwt import generate_jwt
from src.app.services.credential_policy import CredentialPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account
from src.domain.errors import ErrorCode
from src.domain.validation import validate_email, validate_username
from .dtos import AccountInfo, RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Validate username (3-30 chars, letters/digits/underscore, trimmed)
    2. Validate and lower-case email
    3. Validate password against the credential policy
    4. Reject an email that is already registered
    5. Hash password and create the Account
    6. Commit and return a bearer token with public account fields
    """

    def __init__(self, uow: UnitOfWork, credential_policy: Optional[CredentialPolicy] = None):
        self.uow = uow
        self.credential_policy = credential_policy or CredentialPolicy()

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        username_result = validate_username(command.username)
        if username_result.is_err():
            return Return.err(username_result.error)

        email_result = validate_email(command.email)
        if email_result.is_err():
            return Return.err(email_result.error)

        password_check = self.credential_policy.validate_password(command.password)
        if password_check.is_err():
            return Return.err(password_check.error)

        async with self.uow:
            existing = await self.uow.accounts.get_by_email(email_result.value)
            if existing:
                return Return.err(
                    Error(ErrorCode.DUPLICATE_ACCOUNT, "Email already registered")
                )

            account = Account(
                username=username_result.value,
                email=email_result.value,
                password_hash="",
            )
            password_result = self.credential_policy.set_password(
                account, command.password
            )
            if password_result.is_err():
                return Return.err(password_result.error)

            try:
                account = await self.uow.accounts.create(account)
                await self.uow.commit()
            except IntegrityError:
                # Lost a race on the unique email index
                await self.uow.rollback()
                return Return.err(
                    Error(ErrorCode.DUPLICATE_ACCOUNT, "Email already registered")
                )

            logger.info("Account %s registered", account.id)

            return Return.ok(
                RegisterResponse(
                    access_token=generate_jwt(account.id),
                    account=AccountInfo.from_account(account),
                )
            )
