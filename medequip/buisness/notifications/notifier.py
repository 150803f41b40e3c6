"""
Notification sink
Best-effort delivery of alerts to a Telegram chat.

Each notify() call is an independent request sent from a background thread so
the caller never waits on, or fails because of, the messaging service. There
is no retry and no ordering between concurrent notifications.
"""

import threading
from abc import ABC, abstractmethod

import requests

from medequip.utils.logger import get_logger

logger = get_logger("medequip.notifications")

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"


class Notifier(ABC):

    @abstractmethod
    def notify(self, message: str) -> None:
        """Deliver a message; must never raise"""


class TelegramNotifier(Notifier):
    """
    Sends HTML-formatted messages through the Telegram Bot API.

    Args:
        bot_token: Bot token from the settings
        chat_id: Destination chat from the settings
        timeout: Request timeout in seconds
        background: Send from a daemon thread (disable for synchronous use)
    """

    def __init__(self, bot_token: str, chat_id: str, timeout: float = 10.0, background: bool = True):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self.background = background

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def notify(self, message: str) -> None:
        if not self.configured:
            logger.warning("Telegram notification skipped: bot token or chat id not configured")
            return

        if self.background:
            thread = threading.Thread(target=self._deliver, args=(message,), daemon=True)
            thread.start()
        else:
            self._deliver(message)

    def _deliver(self, message: str) -> None:
        url = TELEGRAM_API_URL.format(token=self.bot_token)
        payload = {
            'chat_id': self.chat_id,
            'text': message,
            'parse_mode': 'HTML',
        }
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Telegram notification failed: {e}")
            return

        if not response.ok:
            logger.error(f"Telegram notification rejected with status {response.status_code}")
        else:
            logger.debug("Telegram notification sent")
