import logging
import smtplib
from email.mime.text import MIMEText
from typing import Optional

from starlette.concurrency import run_in_threadpool

from src.app.services.notifier import IPasswordResetNotifier, NotificationError

logger = logging.getLogger(__name__)


def build_reset_email_body(display_name: Optional[str], reset_url: str, expires_in_minutes: int) -> str:
    name = display_name.strip() if display_name and display_name.strip() else "user"
    return (
        f"Hello, {name}!\n\n"
        "We received a request to reset your password.\n"
        "Open this link to set a new password:\n"
        f"{reset_url}\n\n"
        f"This link will expire in {expires_in_minutes} minutes.\n"
        "If you did not request a password reset, you can ignore this email."
    )


class LoggingNotifier(IPasswordResetNotifier):
    """Used when mail delivery is disabled: the link only goes to the log"""

    async def send_password_reset(
        self,
        email: str,
        display_name: Optional[str],
        reset_url: str,
        expires_in_minutes: int,
    ) -> None:
        logger.info(f"Password reset link for {email}: {reset_url}")


class SmtpNotifier(IPasswordResetNotifier):
    """Sends the reset link as a plain text email over SMTP"""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        subject: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.subject = subject
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, email: str, body: str) -> MIMEText:
        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = self.subject
        message["From"] = self.sender
        message["To"] = email
        return message

    def _send(self, email: str, message: MIMEText) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.sendmail(self.sender, [email], message.as_string())

    async def send_password_reset(
        self,
        email: str,
        display_name: Optional[str],
        reset_url: str,
        expires_in_minutes: int,
    ) -> None:
        body = build_reset_email_body(display_name, reset_url, expires_in_minutes)
        message = self._build_message(email, body)
        try:
            await run_in_threadpool(self._send, email, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery to {email} failed: {exc}") from exc

        logger.info(f"Password reset email sent to {email}")
