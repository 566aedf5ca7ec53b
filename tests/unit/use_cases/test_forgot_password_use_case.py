"""
Unit tests for ForgotPasswordUseCase
"""
import hashlib
import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from libs.result import Error, Return
from src.app.use_cases.auth import ForgotPasswordUseCase
from src.domain.errors import ErrorCode
from tests.fixtures.accounts import make_account


@pytest.fixture
def mail_sender():
    sender = MagicMock()
    sender.send = AsyncMock(return_value=Return.ok(None))
    return sender


@pytest.mark.asyncio
async def test_sends_reset_link_for_known_email(mock_uow, mail_sender, reset_tokens):
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    use_case = ForgotPasswordUseCase(mock_uow, mail_sender, reset_tokens)

    result = await use_case.execute("ALICE@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    mock_uow.accounts.update.assert_called_once_with(account)
    mock_uow.commit.assert_called_once()

    to_address, subject, body = mail_sender.send.call_args.args
    assert to_address == "alice@example.com"
    assert subject == "Password Reset Request"
    token = re.search(r"/reset-password/([0-9a-f]{64})", body).group(1)
    assert hashlib.sha256(token.encode()).hexdigest() == account.reset_token_hash
    assert account.reset_token_hash not in body


@pytest.mark.asyncio
async def test_unknown_email_gets_same_response(mock_uow, mail_sender, reset_tokens):
    known = make_account()
    mock_uow.accounts.get_by_email.return_value = known
    use_case = ForgotPasswordUseCase(mock_uow, mail_sender, reset_tokens)
    known_result = await use_case.execute("alice@example.com")

    mock_uow.accounts.get_by_email.return_value = None
    mail_sender.send.reset_mock()
    unknown_result = await use_case.execute("nobody@example.com")

    assert unknown_result.is_ok()
    assert unknown_result.value == known_result.value
    mail_sender.send.assert_not_called()


@pytest.mark.asyncio
async def test_delivery_failure_keeps_token(mock_uow, mail_sender, reset_tokens):
    account = make_account()
    mock_uow.accounts.get_by_email.return_value = account
    mail_sender.send.return_value = Return.err(
        Error(ErrorCode.DELIVERY_FAILED, "Email could not be sent")
    )
    use_case = ForgotPasswordUseCase(mock_uow, mail_sender, reset_tokens)

    result = await use_case.execute("alice@example.com")

    assert result.is_err()
    assert result.error.code == ErrorCode.DELIVERY_FAILED
    assert account.reset_token_hash is not None
    mock_uow.commit.assert_called_once()
