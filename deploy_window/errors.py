"""Exception hierarchy for the deployment window service."""


class DeploymentWindowError(Exception):
    """Base error for the service."""


class ValidationError(DeploymentWindowError):
    """Submitted fields are missing, blank or malformed."""


class NotFoundError(DeploymentWindowError):
    """No deployment window exists with the requested id."""

    def __init__(self, deployment_id: int):
        super().__init__("Deployment not found")
        self.deployment_id = deployment_id


class WebhookError(DeploymentWindowError):
    """The outbound webhook could not be delivered."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
