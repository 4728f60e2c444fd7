"""Daily digest and late-addition alerts.

The digest lists every deployment window of the current UTC+7 civil day and
is posted once a day at the cutoff time (08:00 by default). A window created
for today after the cutoff gets its own alert, since the digest has already
gone out.
"""
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from ..channels.base import Announcement, Channel, Embed
from ..models import DeploymentWindow
from ..store import DeploymentStore
from ..timeutil import (
    day_bounds_ms,
    format_display_time,
    format_full_date,
    is_past_cutoff,
    now_ms,
    same_local_day,
)

logger = logger.bind(module="scheduler.digest")

DIGEST_CONTENT = "🔔 **DEPLOYMENT WINDOW ALERT FOR TONIGHT** 🔔 @everyone"
DIGEST_COLOR = 0x3B82F6  # blue
DIGEST_INTRO = "Please prepare the document and make sure the pre-requisites are met before deployment.\n\n"

LATE_CONTENT = "🚨 **LATE ADDITION: NEW DEPLOYMENT WINDOW FOR TONIGHT** 🚨 @everyone"
LATE_TITLE = "New Scheduled Deployment Added"
LATE_COLOR = 0xEF4444  # red
LATE_INTRO = "A new deployment window has just been requested for today.\n\n"

MISSING_CONFIG = "Missing config"
NOTHING_TO_REPORT = "No deploy today"
SENT = "Sent successfully"


@dataclass
class DigestResult:
    """Outcome of a digest run."""
    success: bool
    message: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, message: str) -> "DigestResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, error: str) -> "DigestResult":
        return cls(success=False, error=error)


# ============== Formatting ==============

def _window_details(window: DeploymentWindow) -> str:
    """Time, issuer and reference lines shared by both message kinds."""
    text = f"⏰ **Time:** {format_display_time(window.time_ms)} (UTC+7)\n"
    text += f"👤 **Issuer:** {window.issuer_name} ({window.team_issuer})\n"
    text += f"🔗 **CRQ:** {window.crq or '-'}\n"
    text += f"📦 **RLM:** {window.rlm or '-'}\n"
    return text


def format_digest(windows: list[DeploymentWindow], day_ms: int) -> Announcement:
    """Compose the daily digest for the given windows.

    Args:
        windows: Windows of the day, already in time order
        day_ms: Any instant within the reported day

    Returns:
        Announcement with the blue digest embed
    """
    description = DIGEST_INTRO
    for index, window in enumerate(windows, start=1):
        description += f"**{index}. {window.title}**\n"
        description += _window_details(window)
        if window.mop_link:
            description += f"📄 [**View MoP Document**]({window.mop_link})\n"
        else:
            description += "📄 **View MoP Document:** -\n"
        description += "\n"

    return Announcement(
        content=DIGEST_CONTENT,
        embed=Embed(
            title=f"Scheduled Deployments for {format_full_date(day_ms)}",
            description=description,
            color=DIGEST_COLOR,
        ),
    )


def format_late_alert(window: DeploymentWindow) -> Announcement:
    """Compose the alert for a single same-day window added after the cutoff."""
    mop = f"[Link]({window.mop_link})" if window.mop_link else "-"

    description = LATE_INTRO
    description += f"**{window.title}**\n"
    description += _window_details(window)
    description += f"📄 **View MoP Document:** {mop}\n"

    return Announcement(
        content=LATE_CONTENT,
        embed=Embed(title=LATE_TITLE, description=description, color=LATE_COLOR),
    )


# ============== Service ==============

class DigestService:
    """Builds and posts the daily digest and late-addition alerts."""

    def __init__(
        self,
        store: DeploymentStore,
        channel: Channel | None = None,
        cutoff_hour: int = 8,
        cutoff_minute: int = 0,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the digest service.

        Args:
            store: Deployment store
            channel: Delivery channel, None when no webhook is configured
            cutoff_hour: UTC+7 hour of the daily digest
            cutoff_minute: UTC+7 minute of the daily digest
            clock: Returns the current time in epoch milliseconds
        """
        self.store = store
        self.channel = channel
        self.cutoff_hour = cutoff_hour
        self.cutoff_minute = cutoff_minute
        self.clock = clock

    async def send_daily_digest(self) -> DigestResult:
        """Post today's deployment windows, if there are any."""
        try:
            await self.store.ensure_initialized()

            if self.channel is None:
                logger.error("DISCORD_WEBHOOK_URL not configured in environment")
                return DigestResult.failed(MISSING_CONFIG)

            current = self.clock()
            start_ms, end_ms = day_bounds_ms(current)
            windows = await self.store.list_between(start_ms, end_ms)

            if not windows:
                logger.info("No deployments scheduled for today. No notification sent.")
                return DigestResult.ok(NOTHING_TO_REPORT)

            await self.channel.send(format_digest(windows, start_ms))

            logger.info(f"Daily digest dispatched with {len(windows)} deployment(s)")
            return DigestResult.ok(SENT)

        except Exception as e:
            logger.error(f"Error sending daily digest: {e}")
            return DigestResult.failed(str(e) or type(e).__name__)

    async def check_late_addition(self, window: DeploymentWindow) -> bool:
        """Alert immediately if a window was added for today after the cutoff.

        Returns:
            True if an alert was posted
        """
        try:
            if self.channel is None:
                return False

            current = self.clock()
            if not same_local_day(current, window.time_ms):
                return False
            if not is_past_cutoff(current, self.cutoff_hour, self.cutoff_minute):
                return False

            await self.channel.send(format_late_alert(window))
            logger.info(f"Late addition alert dispatched for deployment {window.id}")
            return True

        except Exception as e:
            logger.error(f"Error evaluating late deployment alert: {e}")
            return False
