import logging

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.notifier import LoggingNotifier, SmtpNotifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notifier import IPasswordResetNotifier
from src.app.use_cases.password_reset import PasswordResetSettings

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_reset_settings() -> PasswordResetSettings:
    return PasswordResetSettings(
        token_ttl_minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES,
        reset_url_template=ApplicationConfig.PASSWORD_RESET_URL_TEMPLATE,
        min_password_length=ApplicationConfig.PASSWORD_MIN_LENGTH,
        bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS,
    )


def get_notifier() -> IPasswordResetNotifier:
    """
    Pick the reset link delivery channel.

    SMTP when mail is enabled and a host is configured, otherwise the link is
    only written to the log.
    """
    if not ApplicationConfig.PASSWORD_RESET_MAIL_ENABLED:
        return LoggingNotifier()

    if not ApplicationConfig.SMTP_HOST:
        logger.warning("Password reset mail is enabled but SMTP_HOST is not configured")
        return LoggingNotifier()

    return SmtpNotifier(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        sender=ApplicationConfig.PASSWORD_RESET_MAIL_FROM,
        subject=ApplicationConfig.PASSWORD_RESET_MAIL_SUBJECT,
        username=ApplicationConfig.SMTP_USERNAME or None,
        password=ApplicationConfig.SMTP_PASSWORD or None,
        use_tls=ApplicationConfig.SMTP_USE_TLS,
        timeout=ApplicationConfig.SMTP_TIMEOUT_SECONDS,
    )
