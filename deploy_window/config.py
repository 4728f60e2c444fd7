"""Configuration management - service settings loaded from the environment"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
load_dotenv(override=True)


@dataclass
class Settings:
    """Service settings"""

    # Server
    host: str = "0.0.0.0"
    port: int = 8789
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    db_path: Path = field(default_factory=lambda: Path.home() / ".deploy_window" / "deployments.db")

    # Discord webhook (digest + late-addition alerts)
    discord_webhook_url: Optional[str] = None
    webhook_timeout_seconds: float = 10.0

    # Daily digest wall-clock time in UTC+7
    digest_hour: int = 8
    digest_minute: int = 0
    enable_scheduler: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables"""
        debug = os.getenv("DEBUG", "").lower() in ("1", "true")

        return cls(
            # Server
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8789")),
            debug=debug,
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),

            # Storage
            db_path=Path(os.getenv(
                "DEPLOY_WINDOW_DB_PATH", str(Path.home() / ".deploy_window" / "deployments.db")
            )).expanduser(),

            # Webhook
            discord_webhook_url=os.getenv("DISCORD_WEBHOOK_URL") or None,
            webhook_timeout_seconds=float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10")),

            # Digest
            digest_hour=int(os.getenv("DIGEST_HOUR", "8")),
            digest_minute=int(os.getenv("DIGEST_MINUTE", "0")),
            enable_scheduler=os.getenv("ENABLE_SCHEDULER", "true").lower() not in ("0", "false"),
        )


# Global settings instance
settings = Settings.from_env()
