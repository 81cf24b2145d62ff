"""
User Entity

Account whose credential can be reset. Owned by the user store; the reset
flow only reads id/email/display_name and writes password_hash.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email must be unique across all users (matched case-insensitively)
    - Password stored as bcrypt hash
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    display_name: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_users_email_lower", text("lower(email)"), unique=True),
    )
