from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from .schemas import DeploymentPayload, ErrorResponse, MessageResponse
from ..scheduler.digest import DigestService
from ..scheduler.runner import DigestScheduler
from ..services.deployment_service import DeploymentService

router = APIRouter()


def get_deployment_service(request: Request) -> DeploymentService:
    return request.app.state.deployment_service


def get_digest_service(request: Request) -> DigestService:
    return request.app.state.digest_service


def get_scheduler(request: Request) -> DigestScheduler | None:
    return request.app.state.scheduler


# ============== Deployments ==============

@router.get("/api/deployments")
async def list_deployments(service: DeploymentService = Depends(get_deployment_service)):
    """All deployment windows, ordered by time ascending."""
    deployments = await service.list_deployments()
    return [d.to_dict() for d in deployments]


@router.post(
    "/api/deployments",
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def create_deployment(
    payload: DeploymentPayload,
    service: DeploymentService = Depends(get_deployment_service),
):
    deployment = await service.create_deployment(payload.to_input())
    return JSONResponse(status_code=201, content=deployment.to_dict())


@router.put(
    "/api/deployments/{deployment_id}",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_deployment(
    deployment_id: int,
    payload: DeploymentPayload,
    service: DeploymentService = Depends(get_deployment_service),
):
    deployment = await service.update_deployment(deployment_id, payload.to_input())
    return deployment.to_dict()


@router.delete(
    "/api/deployments/{deployment_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_deployment(
    deployment_id: int,
    confirm_title: str | None = Query(default=None, alias="confirmTitle"),
    service: DeploymentService = Depends(get_deployment_service),
):
    """Delete a window; pass confirmTitle to require the exact title."""
    await service.delete_deployment(deployment_id, confirm_title=confirm_title)
    return MessageResponse(message="Deployment deleted successfully")


# ============== Digest trigger ==============

@router.api_route(
    "/api/cron/discord",
    methods=["GET", "POST"],
    response_model=MessageResponse,
    responses={500: {"model": ErrorResponse}},
)
async def trigger_digest(digest: DigestService = Depends(get_digest_service)):
    """Run the daily digest on demand."""
    result = await digest.send_daily_digest()
    if not result.success:
        return JSONResponse(status_code=500, content={"error": result.error or "Internal Server Error"})
    return MessageResponse(message=result.message)


# ============== Health ==============

@router.get("/health")
async def health(request: Request, scheduler: DigestScheduler | None = Depends(get_scheduler)):
    store = request.app.state.store
    await store.ensure_initialized()
    next_run = scheduler.next_run_time() if scheduler else None
    return {
        "status": "ok",
        "deployments": await store.count(),
        "scheduler_running": bool(scheduler and scheduler.is_running),
        "next_digest_at": next_run.isoformat() if next_run else None,
    }
