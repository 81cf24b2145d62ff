from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.base import translate_store_errors
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_store_errors
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    @translate_store_errors
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    @translate_store_errors
    async def list_by_user_id(self, user_id: UUID) -> List[PasswordResetToken]:
        """Get every token issued to a user, newest first"""
        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.user_id == user_id)
            .order_by(PasswordResetToken.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    @translate_store_errors
    async def invalidate_active_for_user(self, user_id: UUID, used_at: datetime) -> int:
        """Set used_at on all unused tokens of a user"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.used_at.is_(None),
            )
            .values(used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    @translate_store_errors
    async def consume(self, token_id: UUID, used_at: datetime) -> bool:
        """Compare-and-set used_at; True only for the caller whose update hit the row"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > used_at,
            )
            .values(used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
