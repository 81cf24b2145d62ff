"""
Password Reset Use Cases

Issuing and consuming password reset tokens.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    GENERIC_RESET_MESSAGE,
    PASSWORD_UPDATED_MESSAGE,
    MessageResponse,
    PasswordResetSettings,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs
    "MessageResponse",
    "PasswordResetSettings",
    # Messages
    "GENERIC_RESET_MESSAGE",
    "PASSWORD_UPDATED_MESSAGE",
]
