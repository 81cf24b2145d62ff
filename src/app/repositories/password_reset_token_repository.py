from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def list_by_user_id(self, user_id: UUID) -> List[PasswordResetToken]:
        """Get every token ever issued to a user, newest first"""
        pass

    @abstractmethod
    async def invalidate_active_for_user(self, user_id: UUID, used_at: datetime) -> int:
        """Set used_at on all unused tokens of a user, returns affected row count"""
        pass

    @abstractmethod
    async def consume(self, token_id: UUID, used_at: datetime) -> bool:
        """
        Mark a token used if and only if it is still active at used_at.

        Returns False when another caller consumed it first or it expired.
        """
        pass
