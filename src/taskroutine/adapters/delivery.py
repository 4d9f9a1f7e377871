"""Reminder delivery channels."""

import logging

import click
import requests

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


class ConsoleDelivery:
    """Print reminders to the terminal as a banner."""

    def __init__(self, sound: bool = True):
        self.sound = sound

    def __call__(self, title: str, body: str) -> None:
        bell = "\a" if self.sound else ""
        click.echo(f"\n{bell}🔔 {click.style(title, bold=True)}: {body}")


class TelegramDelivery:
    """
    Send reminders to a Telegram chat via the Bot HTTP API.

    Errors are logged and swallowed; a failed reminder is never retried.
    """

    def __init__(self, bot_token: str, chat_id: str, timeout: int = 10):
        if not bot_token or not chat_id:
            raise ValueError(
                "TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID must be set in taskroutine.conf "
                "to use NOTIFY_CHANNEL=telegram"
            )
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout
        self._session = requests.Session()

    def __call__(self, title: str, body: str) -> None:
        try:
            resp = self._session.post(
                f"{TELEGRAM_API_BASE}/bot{self.bot_token}/sendMessage",
                json={"chat_id": self.chat_id, "text": f"{title}\n\n{body}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send reminder to Telegram chat {self.chat_id}: {e}")
