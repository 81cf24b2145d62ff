"""
Password Reset Use Case DTOs

Settings and Response classes for the password reset flow.
"""

from pydantic import BaseModel, Field, field_validator

from src.app.services.reset_tokens import DEFAULT_RESET_URL

MIN_TOKEN_TTL_MINUTES = 1

GENERIC_RESET_MESSAGE = "If an account with this email exists, a reset link has been sent"
PASSWORD_UPDATED_MESSAGE = "Password updated successfully"


class PasswordResetSettings(BaseModel):
    """Policy knobs for issuing and consuming reset tokens"""

    token_ttl_minutes: int = Field(default=30, description="Token lifetime, floored at 1 minute")
    reset_url_template: str = Field(default=DEFAULT_RESET_URL)
    min_password_length: int = Field(default=6, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    @field_validator("token_ttl_minutes")
    @classmethod
    def floor_ttl(cls, value: int) -> int:
        return max(value, MIN_TOKEN_TTL_MINUTES)


class MessageResponse(BaseModel):
    """Generic message body returned by both reset endpoints"""

    message: str
