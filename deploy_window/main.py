"""Application entry point - FastAPI app wiring and uvicorn launcher"""
import sys
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from .api import router
from .channels import Channel, DiscordWebhook
from .config import Settings, settings as default_settings
from .errors import NotFoundError, ValidationError
from .scheduler import DigestScheduler, DigestService
from .services import DeploymentService
from .store import DeploymentStore
from .timeutil import now_ms


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru sinks"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
               "<cyan>{extra[module]}</cyan> - <level>{message}</level>",
    )
    logger.configure(extra={"module": "app"})


def _describe_request_errors(exc: RequestValidationError) -> str:
    """First pydantic error as a single line, e.g. "Invalid request: time: Input should be a valid string"."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DeploymentStore] = None,
    channel: Optional[Channel] = None,
    clock: Callable[[], int] = now_ms,
    start_scheduler: Optional[bool] = None,
) -> FastAPI:
    """Build the FastAPI application

    Args:
        settings: Service settings, defaults to the environment
        store: Deployment store, defaults to SQLite at settings.db_path
        channel: Notification channel, defaults to the configured Discord webhook
        clock: Current time in epoch milliseconds
        start_scheduler: Override settings.enable_scheduler
    """
    settings = settings or default_settings
    store = store or DeploymentStore(settings.db_path)
    if channel is None and settings.discord_webhook_url:
        channel = DiscordWebhook(settings.discord_webhook_url, settings.webhook_timeout_seconds)
    if start_scheduler is None:
        start_scheduler = settings.enable_scheduler

    digest = DigestService(
        store,
        channel=channel,
        cutoff_hour=settings.digest_hour,
        cutoff_minute=settings.digest_minute,
        clock=clock,
    )
    scheduler = DigestScheduler(digest, hour=settings.digest_hour, minute=settings.digest_minute)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if channel is None:
            logger.warning("DISCORD_WEBHOOK_URL not set, notifications disabled")
        if start_scheduler:
            scheduler.start()
        yield
        scheduler.shutdown()
        await store.close()

    app = FastAPI(
        title="Deployment Window",
        description="Schedule and announce deployment window requests",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.digest_service = digest
    app.state.deployment_service = DeploymentService(store, digest)
    app.state.scheduler = scheduler

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_request_errors(exc)})

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    app.include_router(router)
    return app


def main():
    """Run the service with uvicorn"""
    import uvicorn

    setup_logging(default_settings.log_level)
    uvicorn.run(
        create_app(default_settings),
        host=default_settings.host,
        port=default_settings.port,
        log_level="debug" if default_settings.debug else "info",
    )


if __name__ == "__main__":
    main()
