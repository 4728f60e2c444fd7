"""Discord webhook channel"""
import asyncio

import aiohttp
from loguru import logger

from .base import Announcement, Channel
from ..errors import WebhookError

logger = logger.bind(module="channels.discord")


class DiscordWebhook(Channel):
    """Discord incoming-webhook channel

    One JSON POST per announcement, no retries.
    """

    def __init__(self, url: str, timeout_seconds: float = 10.0):
        if not url:
            raise ValueError("Discord webhook URL is required")
        self.url = url
        self.timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return "discord"

    async def send(self, announcement: Announcement) -> None:
        """Post the announcement to the webhook"""
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.url,
                    json=announcement.to_payload(),
                    headers={"Content-Type": "application/json"},
                ) as resp:
                    if resp.status >= 400:
                        error_text = await resp.text()
                        raise WebhookError(f"Discord API error: {error_text}", status=resp.status)
        except aiohttp.ClientError as e:
            raise WebhookError(f"Discord webhook unreachable: {e}")
        except asyncio.TimeoutError:
            raise WebhookError("Discord webhook timed out")

        logger.debug(f"Webhook delivered: {announcement.embed.title}")
