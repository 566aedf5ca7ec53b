from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.credential_policy import CredentialPolicy
from src.app.services.reset_token_service import ResetTokenService
from tests.fixtures.accounts import TEST_BCRYPT_ROUNDS, FrozenClock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_reset_token_hash = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    return uow


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def credential_policy(clock):
    return CredentialPolicy(
        rounds=TEST_BCRYPT_ROUNDS,
        min_password_length=8,
        max_login_attempts=5,
        lock_duration=timedelta(minutes=30),
        clock=clock,
    )


@pytest.fixture
def reset_tokens(credential_policy, clock):
    return ResetTokenService(
        credential_policy=credential_policy,
        ttl=timedelta(minutes=15),
        clock=clock,
    )
