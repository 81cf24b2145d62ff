import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.password_reset import PasswordResetSettings


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock()
    uow.password_reset_tokens.invalidate_active_for_user = AsyncMock(return_value=0)
    uow.password_reset_tokens.consume = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def settings():
    # Cheapest bcrypt cost keeps the suite fast
    return PasswordResetSettings(token_ttl_minutes=30, bcrypt_rounds=4)


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_password_reset = AsyncMock()
    return notifier
