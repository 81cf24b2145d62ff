"""
Confirm Password Reset Use Case

Consumes a reset token and sets the new password.
"""

import logging
from typing import Optional

import bcrypt
from starlette.concurrency import run_in_threadpool

from src.app.result import Result, Return
from src.app.services.reset_tokens import hash_reset_secret, is_utf8_encodable
from src.app.services.unit_of_work import StoreError, UnitOfWork
from src.domain.base import utcnow
from .dtos import PASSWORD_UPDATED_MESSAGE, MessageResponse, PasswordResetSettings
from .errors import (
    BCRYPT_MAX_PASSWORD_BYTES,
    STORE_FAILURE,
    invalid_or_expired_token,
    invalid_request,
    store_failure,
    weak_credential,
)

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token is looked up by its SHA-256 hash
    - Unknown, expired and already used tokens fail with one error code
    - Consumption is a conditional update: of several concurrent callers with
      the same token exactly one succeeds
    - Token consumption and password change commit together or not at all
    - Remaining unused tokens of the user are invalidated
    """

    def __init__(self, uow: UnitOfWork, settings: PasswordResetSettings):
        self.uow = uow
        self.settings = settings

    def _validate_password(self, password: Optional[str]) -> Result[None]:
        min_length = self.settings.min_password_length
        if password is None or len(password) < min_length:
            return Return.err(weak_credential(f"Password must be at least {min_length} characters"))

        if not is_utf8_encodable(password):
            return Return.err(weak_credential("Password contains invalid characters"))

        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            return Return.err(
                weak_credential(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
            )

        return Return.ok(None)

    async def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(self.settings.bcrypt_rounds)
        # Off the event loop
        password_hash = await run_in_threadpool(bcrypt.hashpw, password.encode("utf-8"), salt)
        return password_hash.decode()

    async def execute(self, token: Optional[str], new_password: Optional[str]) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Raw reset secret from the reset link
            new_password: New password to set

        Returns:
            Result with the success message, or Error

        Errors:
            - INVALID_REQUEST: Token missing or blank
            - WEAK_CREDENTIAL: Password does not meet the length policy
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, expired or already used
            - STORE_FAILURE: Persistence failure
        """
        raw_secret = (token or "").strip()
        if not raw_secret:
            return Return.err(invalid_request("Reset token is required"))

        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        # Lone surrogates never occur in an issued secret
        if not is_utf8_encodable(raw_secret):
            return Return.err(invalid_or_expired_token())

        try:
            return await self._reset(raw_secret, new_password)
        except StoreError:
            logger.exception(f"Password reset confirmation failed ({STORE_FAILURE})")
            return Return.err(store_failure())

    async def _reset(self, raw_secret: str, new_password: str) -> Result[MessageResponse]:
        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(
                hash_reset_secret(raw_secret)
            )

            now = utcnow()
            if reset_token is None or not reset_token.is_active(now):
                return Return.err(invalid_or_expired_token())

            password_hash = await self._hash_password(new_password)

            # Lost race or expired since lookup
            consumed = await self.uow.password_reset_tokens.consume(reset_token.id, now)
            if not consumed:
                return Return.err(invalid_or_expired_token())

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                logger.warning(f"Password reset token {reset_token.id} references a missing user")
                return Return.err(invalid_or_expired_token())

            user.password_hash = password_hash
            await self.uow.users.update(user)

            await self.uow.password_reset_tokens.invalidate_active_for_user(user.id, now)

            await self.uow.commit()

        logger.info(f"Password reset token {reset_token.id} consumed, password updated for user {user.id}")

        return Return.ok(MessageResponse(message=PASSWORD_UPDATED_MESSAGE))
