"""
Break reminder delivery

Notifiers are best effort: the study timer asks for permission once and
treats any delivery failure as a no-op.
"""

import logging
from typing import Optional, Protocol

import httpx

from .errors import NotificationUnavailable

logger = logging.getLogger(__name__)

BREAK_REMINDER_TITLE = "Study Break Reminder 🌱"
BREAK_REMINDER_BODY = "You've been studying for 25 minutes. Time for a 5-minute break?"
BREAK_REMINDER_TAG = "study-break"


class BreakNotifier(Protocol):
    """Capability used by the timer to deliver break reminders.

    ``notify`` may return an awaitable; the timer schedules it without
    waiting for the result.
    """

    def request_permission(self) -> bool: ...

    def notify(self, title: str, body: str): ...


class WebhookBreakNotifier:
    """Posts break reminders as JSON to a webhook (ntfy, Slack relay, etc.)"""

    def __init__(
        self,
        url: Optional[str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def request_permission(self) -> bool:
        return bool(self.url)

    async def notify(self, title: str, body: str) -> None:
        """
        Send a reminder to the configured webhook

        Raises:
            NotificationUnavailable: No URL configured or the webhook rejected the request
        """
        if not self.url:
            raise NotificationUnavailable("No break reminder webhook configured")

        payload = {"title": title, "body": body, "tag": BREAK_REMINDER_TAG}

        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.post(
                    self.url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                    },
                    timeout=self.timeout,
                )
            except httpx.HTTPError as e:
                raise NotificationUnavailable(f"Webhook request failed: {e}") from e

        if response.status_code >= 400:
            raise NotificationUnavailable(
                f"Webhook returned {response.status_code}: {response.text}"
            )

        logger.info(f"Break reminder delivered to webhook ({response.status_code})")
