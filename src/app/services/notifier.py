from abc import ABC, abstractmethod
from typing import Optional


class NotificationError(Exception):
    """Delivery of a notification failed"""


class IPasswordResetNotifier(ABC):
    """Out-of-band delivery of password reset links - application layer"""

    @abstractmethod
    async def send_password_reset(
        self,
        email: str,
        display_name: Optional[str],
        reset_url: str,
        expires_in_minutes: int,
    ) -> None:
        """Deliver the reset link to the user. Raises NotificationError on failure."""
        pass
