"""Notification channels"""
from .base import Announcement, Channel, Embed
from .discord import DiscordWebhook

__all__ = [
    "Announcement",
    "Channel",
    "Embed",
    "DiscordWebhook",
]
