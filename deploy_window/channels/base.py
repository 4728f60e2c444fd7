"""Notification channel base class"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class Embed:
    """A single rich embed block (title, free-text body, accent color)."""
    title: str
    description: str
    color: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "color": self.color,
        }


@dataclass
class Announcement:
    """Outbound message: a top-level announcement line plus one embed."""
    content: str
    embed: Embed

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON body posted to the webhook."""
        return {
            "content": self.content,
            "embeds": [self.embed.to_dict()],
        }


class Channel(ABC):
    """Notification channel

    Implementations deliver an Announcement and raise on failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name, used in logs"""
        pass

    @abstractmethod
    async def send(self, announcement: Announcement) -> None:
        """Deliver an announcement

        Args:
            announcement: Message to deliver

        Raises:
            WebhookError: If delivery fails
        """
        pass
