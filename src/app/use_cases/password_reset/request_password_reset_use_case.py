"""
Request Password Reset Use Case

Issues a single-use reset token and hands the reset link to the notifier.
"""

import logging
from datetime import timedelta
from typing import Optional

from src.app.result import Result, Return
from src.app.services.notifier import IPasswordResetNotifier
from src.app.services.reset_tokens import (
    build_reset_url,
    generate_reset_secret,
    hash_reset_secret,
    is_utf8_encodable,
    truncate,
)
from src.app.services.unit_of_work import StoreError, UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken, REQUEST_IP_MAX_LENGTH, USER_AGENT_MAX_LENGTH
from .dtos import GENERIC_RESET_MESSAGE, MessageResponse, PasswordResetSettings
from .errors import NOTIFIER_FAILURE, STORE_FAILURE, UNKNOWN_ACCOUNT, store_failure

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - No email enumeration: the same response whether or not the account exists
    - Every earlier unused token of the user is invalidated in the same
      transaction that inserts the new one
    - The user row is locked while issuing, so concurrent requests for one user
      leave exactly one active token
    - Only the SHA-256 of the secret is stored
    - Notification happens after commit; delivery failures are logged, never reported
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: IPasswordResetNotifier,
        settings: PasswordResetSettings,
    ):
        self.uow = uow
        self.notifier = notifier
        self.settings = settings

    async def execute(
        self,
        email: Optional[str],
        request_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Email as typed by the user, may be blank or unknown
            request_ip: Client address, diagnostic only
            user_agent: Client user agent, diagnostic only

        Returns:
            Result with the generic message, or STORE_FAILURE
        """
        normalized_email = (email or "").strip().lower()
        if not normalized_email or not is_utf8_encodable(normalized_email):
            return Return.ok(MessageResponse(message=GENERIC_RESET_MESSAGE))

        try:
            async with self.uow:
                user = await self.uow.users.get_by_email(normalized_email, for_update=True)

                if user is None:
                    logger.info(f"Password reset requested for unknown email ({UNKNOWN_ACCOUNT})")
                    return Return.ok(MessageResponse(message=GENERIC_RESET_MESSAGE))

                now = utcnow()
                invalidated = await self.uow.password_reset_tokens.invalidate_active_for_user(
                    user.id, now
                )

                raw_secret = generate_reset_secret()
                reset_token = PasswordResetToken(
                    user_id=user.id,
                    token_hash=hash_reset_secret(raw_secret),
                    created_at=now,
                    expires_at=now + timedelta(minutes=self.settings.token_ttl_minutes),
                    request_ip=truncate(request_ip, REQUEST_IP_MAX_LENGTH),
                    user_agent=truncate(user_agent, USER_AGENT_MAX_LENGTH),
                )
                reset_token = await self.uow.password_reset_tokens.create(reset_token)

                await self.uow.commit()
        except StoreError:
            logger.exception(f"Password reset request failed ({STORE_FAILURE})")
            return Return.err(store_failure())

        logger.info(
            f"Password reset token {reset_token.id} issued for user {user.id}, "
            f"{invalidated} earlier token(s) invalidated"
        )

        reset_url = build_reset_url(self.settings.reset_url_template, raw_secret)
        try:
            await self.notifier.send_password_reset(
                email=user.email,
                display_name=user.display_name,
                reset_url=reset_url,
                expires_in_minutes=self.settings.token_ttl_minutes,
            )
        except Exception:
            logger.exception(f"Password reset notification failed for user {user.id} ({NOTIFIER_FAILURE})")

        return Return.ok(MessageResponse(message=GENERIC_RESET_MESSAGE))
