"""Shared fixtures for the test suite."""
import os
import sys
from datetime import datetime

import pytest
import pytest_asyncio

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from deploy_window.channels.base import Announcement, Channel
from deploy_window.errors import WebhookError
from deploy_window.store import DeploymentStore
from deploy_window.timeutil import LOCAL_TZ, to_ms


def local_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    """Epoch ms for a UTC+7 wall-clock time."""
    return to_ms(datetime(year, month, day, hour, minute, tzinfo=LOCAL_TZ))


class FakeChannel(Channel):
    """Records announcements instead of posting them."""

    def __init__(self, fail: bool = False):
        self.sent: list[Announcement] = []
        self.fail = fail

    @property
    def name(self) -> str:
        return "fake"

    async def send(self, announcement: Announcement) -> None:
        if self.fail:
            raise WebhookError("Discord API error: boom", status=500)
        self.sent.append(announcement)


class FakeClock:
    """Settable clock returning epoch milliseconds."""

    def __init__(self, current_ms: int):
        self.current_ms = current_ms

    def __call__(self) -> int:
        return self.current_ms

    def set(self, year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> None:
        self.current_ms = local_ms(year, month, day, hour, minute)


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def clock():
    # 2026-10-19 09:00 UTC+7
    return FakeClock(local_ms(2026, 10, 19, 9, 0))


@pytest_asyncio.fixture
async def store(tmp_path):
    s = DeploymentStore(tmp_path / "deployments.db")
    await s.initialize()
    yield s
    await s.close()
