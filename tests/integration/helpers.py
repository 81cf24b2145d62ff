import hashlib
import secrets
from datetime import timedelta
from typing import List, Optional
from urllib.parse import parse_qs, urlparse
from uuid import UUID

import bcrypt
from sqlmodel import select

from src.adapter.repositories.user_repository import UserRepository
from src.app.services.notifier import IPasswordResetNotifier, NotificationError
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken, User


class RecordingNotifier(IPasswordResetNotifier):
    """Keeps every reset link instead of delivering it"""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_password_reset(self, email, display_name, reset_url, expires_in_minutes):
        self.sent.append(
            {
                "email": email,
                "display_name": display_name,
                "reset_url": reset_url,
                "expires_in_minutes": expires_in_minutes,
            }
        )
        if self.fail:
            raise NotificationError("mail server unavailable")

    def raw_secrets(self) -> List[str]:
        return [parse_qs(urlparse(item["reset_url"]).query)["token"][0] for item in self.sent]


async def create_user(
    session_factory,
    email: str = "user@example.com",
    password: str = "OldPass123!",
    display_name: Optional[str] = "Test User",
) -> User:
    password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()
    user = User(email=email, password_hash=password_hash, display_name=display_name)
    async with session_factory() as session:
        user = await UserRepository(session).create(user)
        await session.commit()
    return user


async def create_reset_token(
    session_factory,
    user_id: UUID,
    expired: bool = False,
    used: bool = False,
) -> str:
    """Insert a token directly, returns the raw secret"""
    plain_token = secrets.token_urlsafe(32)
    now = utcnow()
    token = PasswordResetToken(
        user_id=user_id,
        token_hash=hashlib.sha256(plain_token.encode()).hexdigest(),
        created_at=now - timedelta(hours=3) if expired else now,
        expires_at=now - timedelta(hours=2) if expired else now + timedelta(minutes=30),
        used_at=now - timedelta(minutes=1) if used else None,
    )
    async with session_factory() as session:
        session.add(token)
        await session.commit()
    return plain_token


async def fetch_tokens(session_factory, user_id: Optional[UUID] = None) -> List[PasswordResetToken]:
    async with session_factory() as session:
        stmt = select(PasswordResetToken)
        if user_id is not None:
            stmt = stmt.where(PasswordResetToken.user_id == user_id)
        result = await session.exec(stmt.order_by(PasswordResetToken.created_at))
        return list(result.all())


async def fetch_user(session_factory, user_id: UUID) -> User:
    async with session_factory() as session:
        return await session.get(User, user_id)


def active_tokens(tokens: List[PasswordResetToken]) -> List[PasswordResetToken]:
    now = utcnow()
    return [token for token in tokens if token.is_active(now)]


def password_matches(user: User, password: str) -> bool:
    return bcrypt.checkpw(password.encode(), user.password_hash.encode())
