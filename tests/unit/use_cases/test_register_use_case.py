"""
Unit tests for RegisterUseCase
"""
import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.auth import RegisterCommand, RegisterUseCase
from src.domain.errors import ErrorCode
from tests.fixtures.accounts import make_account


@pytest.fixture
def use_case(mock_uow, credential_policy):
    return RegisterUseCase(mock_uow, credential_policy)


@pytest.mark.asyncio
async def test_successful_registration(use_case, mock_uow, credential_policy):
    command = RegisterCommand(
        username=" alice ", email="Alice@Example.com", password="password1"
    )

    result = await use_case.execute(command)

    assert result.is_ok()
    data = result.value
    assert data.access_token
    assert data.token_type == "bearer"
    assert data.account.username == "alice"
    assert data.account.email == "alice@example.com"
    assert "password_hash" not in data.model_dump()["account"]

    mock_uow.accounts.get_by_email.assert_called_once_with("alice@example.com")
    created = mock_uow.accounts.create.call_args.args[0]
    assert created.password_hash != "password1"
    assert credential_policy.verify_password(created, "password1")
    assert created.password_changed_at is not None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_duplicate_email(use_case, mock_uow):
    mock_uow.accounts.get_by_email.return_value = make_account()

    result = await use_case.execute(
        RegisterCommand(username="alice2", email="ALICE@example.com", password="password1")
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.DUPLICATE_ACCOUNT
    mock_uow.accounts.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_duplicate_email_on_insert(use_case, mock_uow):
    # Another registration took the email between lookup and insert
    mock_uow.accounts.create.side_effect = IntegrityError(
        "INSERT INTO accounts", {}, Exception("UNIQUE constraint failed: accounts.email")
    )

    result = await use_case.execute(
        RegisterCommand(username="alice", email="alice@example.com", password="password1")
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.DUPLICATE_ACCOUNT
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username,email,password",
    [
        ("al", "alice@example.com", "password1"),
        ("alice smith", "alice@example.com", "password1"),
        ("alice", "not-an-email", "password1"),
        ("alice", "alice@example.com", "pass"),
        ("alice", "alice@example.com", ""),
    ],
)
async def test_invalid_input(use_case, mock_uow, username, email, password):
    result = await use_case.execute(
        RegisterCommand(username=username, email=email, password=password)
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    mock_uow.accounts.get_by_email.assert_not_called()
    mock_uow.accounts.create.assert_not_called()
