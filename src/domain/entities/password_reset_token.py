"""
PasswordResetToken Entity

Single-use, time-limited password reset credentials.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import ResetTokenState

REQUEST_IP_MAX_LENGTH = 64
USER_AGENT_MAX_LENGTH = 255


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity.

    Business Rules:
    - token_hash is the SHA-256 hex digest of the raw secret; the raw secret
      itself is never stored
    - Active while used_at is null and expires_at is in the future
    - used_at is written once (Active -> Consumed) and never cleared
    - Rows are kept as an audit trail, never deleted here
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id")
    token_hash: str = Field(max_length=64)  # SHA-256 output

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime, nullable=True))

    # Provenance (diagnostic only)
    request_ip: Optional[str] = Field(default=None, max_length=REQUEST_IP_MAX_LENGTH)
    user_agent: Optional[str] = Field(default=None, max_length=USER_AGENT_MAX_LENGTH)

    __table_args__ = (
        UniqueConstraint("token_hash", name="uq_password_reset_token_hash"),
        Index("idx_password_reset_user_id", "user_id"),
    )

    def state(self, now: datetime) -> ResetTokenState:
        if self.used_at is not None:
            return ResetTokenState.consumed
        if self.expires_at <= now:
            return ResetTokenState.expired
        return ResetTokenState.active

    def is_active(self, now: datetime) -> bool:
        return self.state(now) is ResetTokenState.active
