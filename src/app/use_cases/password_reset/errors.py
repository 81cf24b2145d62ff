"""
Password reset error taxonomy.

Client errors are reported as 400, STORE_FAILURE as 500. UNKNOWN_ACCOUNT and
NOTIFIER_FAILURE are only ever logged: the caller always sees success.
"""

from src.app.result import Error

INVALID_REQUEST = "INVALID_REQUEST"
WEAK_CREDENTIAL = "WEAK_CREDENTIAL"
INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
UNKNOWN_ACCOUNT = "UNKNOWN_ACCOUNT"
NOTIFIER_FAILURE = "NOTIFIER_FAILURE"
STORE_FAILURE = "STORE_FAILURE"

CLIENT_ERROR_CODES = frozenset({INVALID_REQUEST, WEAK_CREDENTIAL, INVALID_OR_EXPIRED_TOKEN})

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


def invalid_request(message: str) -> Error:
    return Error(INVALID_REQUEST, message)


def weak_credential(message: str) -> Error:
    return Error(WEAK_CREDENTIAL, message)


def invalid_or_expired_token() -> Error:
    # Same error for unknown, expired and already used tokens
    return Error(INVALID_OR_EXPIRED_TOKEN, "Invalid or expired reset token")


def store_failure() -> Error:
    return Error(STORE_FAILURE, "Password reset store is unavailable")
