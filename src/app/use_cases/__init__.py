"""
Use Cases

Organized by domain folder:
- password_reset/: Issuing and consuming password reset tokens
"""

from .password_reset import (
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
]
