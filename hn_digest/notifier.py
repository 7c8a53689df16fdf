from __future__ import annotations

import base64
import logging
from typing import Dict, Iterable, Protocol

import httpx

from .exceptions import DeliveryFailure
from .models import NotificationPayload, StoryItem

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://ntfy.sh"


class Notifier(Protocol):
    def send(self, payload: NotificationPayload) -> bool:  # pragma: no cover - interface
        ...


def story_payload(item: StoryItem, *, tags: str) -> NotificationPayload:
    """One notification per story; tapping it opens the article."""
    return NotificationPayload(
        title=item.title,
        tags=tags,
        body=f"{item.display_summary}\n{item.url}",
        click_url=item.url,
    )


def digest_payload(items: Iterable[StoryItem], *, title: str, tags: str) -> NotificationPayload:
    entries = []
    for n, item in enumerate(items, start=1):
        entries.append(
            f"{n}. {item.title} ({item.score} points)\n"
            f"{item.display_summary}\n"
            f"{item.url}"
        )
    return NotificationPayload(title=title, tags=tags, body="\n\n".join(entries))


def encode_header(value: str) -> str:
    """Return `value` unchanged if ASCII, else as an RFC 2047 encoded-word.

    HTTP header values must be ASCII; ntfy decodes `=?UTF-8?B?...?=` itself.
    """
    try:
        value.encode("ascii")
        return value
    except UnicodeEncodeError:
        encoded = base64.b64encode(value.encode("utf-8")).decode("ascii")
        return f"=?UTF-8?B?{encoded}?="


def build_headers(payload: NotificationPayload) -> Dict[str, str]:
    headers = {
        "Title": encode_header(payload.title),
        "Tags": encode_header(payload.tags),
    }
    if payload.click_url:
        headers["Click"] = encode_header(payload.click_url)
    return headers


class NtfyNotifier:
    """Publishes notifications to an ntfy topic.

    Delivery is fire-and-forget: `send` logs failures and returns False
    instead of raising.
    """

    def __init__(self, client: httpx.Client, *, topic: str, server: str = DEFAULT_SERVER) -> None:
        self._client = client
        self.topic = topic
        self.server = server.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.server}/{self.topic}"

    def publish(self, payload: NotificationPayload) -> None:
        """Send a payload; raises DeliveryFailure when the relay does not accept it."""
        try:
            r = self._client.post(
                self.endpoint,
                headers=build_headers(payload),
                content=payload.body.encode("utf-8"),
            )
        except httpx.HTTPError as e:
            raise DeliveryFailure(f"Failed to send notification for {payload.title}: {e}") from e
        if not r.is_success:
            raise DeliveryFailure(
                f"Failed to send notification for {payload.title}: {r.status_code}",
                status_code=r.status_code,
            )

    def send(self, payload: NotificationPayload) -> bool:
        try:
            self.publish(payload)
        except DeliveryFailure as e:
            logger.error("%s", e)
            return False
        return True


class DryRunNotifier:
    """Logs payloads instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list = []

    def send(self, payload: NotificationPayload) -> bool:
        logger.info("dry-run notification title=%r click=%s\n%s", payload.title, payload.click_url, payload.body)
        self.sent.append(payload)
        return True
