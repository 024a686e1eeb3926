"""Password Reset Notifier — logs the reset link instead of sending mail.

Invariants:
    - Implements core.repository_protocols.PasswordResetNotifier
    - Never raises: delivery problems must not reveal whether an account exists
"""

import logging
from urllib.parse import urlencode

logger = logging.getLogger(__name__)


class LoggingResetNotifier:
    def __init__(self, reset_url: str):
        self._reset_url = reset_url

    def reset_link(self, code: str) -> str:
        return f"{self._reset_url}?{urlencode({'oobCode': code})}"

    async def send_reset_code(self, email: str, code: str) -> None:
        logger.info(
            f"Password reset link for {email}: {self.reset_link(code)}",
            extra={"resource": "password_reset"},
        )
