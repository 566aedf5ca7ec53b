from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.app.services.mail_sender import IMailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AccountInfo,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    LoadAccountUseCase,
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
)
from src.depends import get_current_account, get_mail_sender, get_unit_of_work
from src.domain.errors import ErrorCode

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Field rules (username format, password length) are enforced by the
    use case so every entry point reports them the same way.
    """

    username: str = Field(..., description="Username (3-30 letters, digits, underscores)")
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Password (min 8 chars)")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Register a new account and return a bearer token.

    Raises:
        - 400 Bad Request: Invalid username, email or password
        - 409 Conflict: Email already registered
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.VALIDATION_ERROR:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.DUPLICATE_ACCOUNT:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Authenticate and return a bearer token.

    Raises:
        - 401 Unauthorized: Unknown email or wrong password (same response)
        - 423 Locked: Too many failed attempts
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == ErrorCode.ACCOUNT_LOCKED:
            raise ClientError(error, status_code=status.HTTP_423_LOCKED)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ForgotPasswordResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mail_sender: IMailSender = Depends(get_mail_sender),
):
    """
    Email a password reset link.

    Security:
        - No email enumeration (same response for registered/unknown emails)
        - Token expires in 15 minutes and only its SHA-256 hash is stored

    Raises:
        - 503 Service Unavailable: Email could not be sent (retryable)
        - 500 Internal Server Error: Server error
    """
    use_case = ForgotPasswordUseCase(uow, mail_sender)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.DELIVERY_FAILED:
            raise ServerError(
                error,
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                expose_message=True,
            )
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    password: str = Field(
        ...,
        validation_alias=AliasChoices("password", "new_password", "newPassword"),
        description="New password (min 8 chars)",
    )


async def _reset_password(token: str, request: ResetPasswordRequest, uow: UnitOfWork):
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(token, request.password)

    if result.is_err():
        error = result.error
        if error.code in (ErrorCode.INVALID_OR_EXPIRED_TOKEN, ErrorCode.VALIDATION_ERROR):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/reset-password/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Redeem a reset token and set a new password.

    Raises:
        - 400 Bad Request: Invalid, expired or used token, or rejected password
        - 500 Internal Server Error: Server error
    """
    return await _reset_password(token, request, uow)


@router.put(
    "/reset-password/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password_put(
    token: str,
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Same as POST /auth/reset-password/{token}"""
    return await _reset_password(token, request, uow)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AccountInfo)
async def get_me(
    current_account: dict = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current account behind the bearer token.

    Raises:
        - 401 Unauthorized: Invalid or expired token, unknown account, or
          token issued before the last password change
        - 500 Internal Server Error: Server error
    """
    try:
        account_id = UUID(current_account["sub"])
        issued_at = int(current_account["iat"])
    except (TypeError, ValueError):
        raise ClientError(
            Error(ErrorCode.INVALID_TOKEN, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = LoadAccountUseCase(uow)
    result = await use_case.execute(account_id, issued_at)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_TOKEN:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
