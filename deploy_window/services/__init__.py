"""Service layer"""
from .deployment_service import DeploymentService

__all__ = ["DeploymentService"]
