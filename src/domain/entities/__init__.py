"""
Password Reset Domain Entities

Each entity in its own file.
"""

from .enums import ResetTokenState

from .user import User
from .password_reset_token import (
    PasswordResetToken,
    REQUEST_IP_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
)

__all__ = [
    # Enums
    "ResetTokenState",
    # Entities
    "User",
    "PasswordResetToken",
    # Limits
    "REQUEST_IP_MAX_LENGTH",
    "USER_AGENT_MAX_LENGTH",
]
