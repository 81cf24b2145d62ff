"""
Reset token primitives: secret generation, fingerprinting and link building.
"""

import hashlib
import secrets
from typing import Optional

# 32 bytes = 256 bits of entropy, 43 URL-safe characters without padding
RESET_SECRET_BYTES = 32

DEFAULT_RESET_URL = "http://localhost:3000/reset-password?token={token}"
TOKEN_PLACEHOLDER = "{token}"


def generate_reset_secret() -> str:
    """Generate a URL-safe raw reset secret from the OS CSPRNG."""
    return secrets.token_urlsafe(RESET_SECRET_BYTES)


def hash_reset_secret(raw_secret: str) -> str:
    """SHA-256 hex digest of the raw secret, used for storage and lookup."""
    return hashlib.sha256(raw_secret.encode("utf-8")).hexdigest()


def is_utf8_encodable(value: str) -> bool:
    """False for strings holding lone surrogates, which JSON allows but UTF-8 does not."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def build_reset_url(template: Optional[str], raw_secret: str) -> str:
    """
    Build the link sent to the user.

    The {token} placeholder is substituted when present, otherwise the secret
    is appended as a token= query parameter.
    """
    if template is None or not template.strip():
        template = DEFAULT_RESET_URL

    if TOKEN_PLACEHOLDER in template:
        return template.replace(TOKEN_PLACEHOLDER, raw_secret)

    separator = "&" if "?" in template else "?"
    return f"{template}{separator}token={raw_secret}"


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value[:max_length]
