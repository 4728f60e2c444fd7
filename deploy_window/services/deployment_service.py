"""Deployment service - request handlers over the deployment store"""
from loguru import logger

from ..errors import NotFoundError, ValidationError
from ..models import DeploymentInput, DeploymentWindow
from ..scheduler.digest import DigestService
from ..store import DeploymentStore

logger = logger.bind(module="services.deployment")


class DeploymentService:
    """Deployment service

    List / create / update / delete deployment windows. Creating a window
    also runs the late-addition check; its failures never fail the request.
    """

    def __init__(self, store: DeploymentStore, digest: DigestService | None = None):
        self.store = store
        self.digest = digest

    async def list_deployments(self) -> list[DeploymentWindow]:
        """All windows ordered by time ascending"""
        await self.store.ensure_initialized()
        return await self.store.list_all()

    async def create_deployment(self, data: DeploymentInput) -> DeploymentWindow:
        """Create a window

        Raises:
            ValidationError: If a required field is blank
        """
        await self.store.ensure_initialized()
        fields = data.validate()
        window = await self.store.create(fields)
        logger.info(f"Deployment created: {window.id} '{window.title}'")

        if self.digest is not None:
            try:
                await self.digest.check_late_addition(window)
            except Exception as e:
                logger.error(f"Late addition check failed for {window.id}: {e}")

        return window

    async def update_deployment(self, deployment_id: int, data: DeploymentInput) -> DeploymentWindow:
        """Replace all editable fields of a window

        Raises:
            NotFoundError: If the id does not exist
            ValidationError: If a required field is blank
        """
        await self.store.ensure_initialized()
        if await self.store.get(deployment_id) is None:
            raise NotFoundError(deployment_id)

        fields = data.validate()
        window = await self.store.update(deployment_id, fields)
        if window is None:
            raise NotFoundError(deployment_id)

        logger.info(f"Deployment updated: {deployment_id}")
        return window

    async def delete_deployment(self, deployment_id: int, confirm_title: str | None = None) -> None:
        """Delete a window

        Args:
            deployment_id: Window id
            confirm_title: If given, must match the stored title exactly

        Raises:
            NotFoundError: If the id does not exist
            ValidationError: If confirm_title does not match
        """
        await self.store.ensure_initialized()
        window = await self.store.get(deployment_id)
        if window is None:
            raise NotFoundError(deployment_id)

        if confirm_title is not None and confirm_title != window.title:
            raise ValidationError("Confirmation title does not match the deployment title")

        if not await self.store.delete(deployment_id):
            raise NotFoundError(deployment_id)

        logger.info(f"Deployment deleted: {deployment_id}")
