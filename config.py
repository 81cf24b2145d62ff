import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    MIGRATION_DB_URI = data.get("MIGRATION_DB_URI", "sqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Password reset
    PASSWORD_RESET_TOKEN_TTL_MINUTES = int(data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 30))
    PASSWORD_RESET_URL_TEMPLATE = data.get(
        "PASSWORD_RESET_URL_TEMPLATE", "http://localhost:3000/reset-password?token={token}"
    )
    PASSWORD_RESET_MAIL_ENABLED = bool(data.get("PASSWORD_RESET_MAIL_ENABLED", False))
    PASSWORD_RESET_MAIL_FROM = data.get("PASSWORD_RESET_MAIL_FROM", "no-reply@infohub.local")
    PASSWORD_RESET_MAIL_SUBJECT = data.get("PASSWORD_RESET_MAIL_SUBJECT", "Password reset")
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 6))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # SMTP delivery (only used when PASSWORD_RESET_MAIL_ENABLED)
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_TIMEOUT_SECONDS = float(data.get("SMTP_TIMEOUT_SECONDS", 10))
