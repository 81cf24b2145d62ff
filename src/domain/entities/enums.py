"""
Password Reset Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class ResetTokenState(str, Enum):
    """Lifecycle state of a password reset token"""

    active = "active"
    consumed = "consumed"
    expired = "expired"
