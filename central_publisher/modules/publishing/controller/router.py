"""FastAPI routes exposing publish, status and drop."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from central_publisher.modules.publishing.service import OperationResult, PublishingService

router = APIRouter(prefix="/publishing", tags=["publishing"])

_STATUS_BY_KIND = {
    "precondition": 400,
    "network": 502,
    "filesystem": 500,
    "stage": 500,
}


class PublishRequest(BaseModel):
    publishing_type: Optional[str] = None
    component_type: Optional[str] = None


def get_service(request: Request) -> PublishingService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "publishing_service", None):
        raise HTTPException(status_code=500, detail="Publishing service not initialized.")
    return container.publishing_service


def _unwrap(result: OperationResult):
    if not result.ok:
        raise HTTPException(status_code=_STATUS_BY_KIND.get(result.kind or "", 500), detail=result.message)
    return result.as_dict()


@router.post("/publish")
def publish(payload: PublishRequest, svc: PublishingService = Depends(get_service)):
    return _unwrap(
        svc.publish(
            publishing_type=payload.publishing_type,
            component_type=payload.component_type,
        )
    )


@router.get("/deployments/{deployment_id}")
def deployment_status(deployment_id: str, svc: PublishingService = Depends(get_service)):
    return _unwrap(svc.deployment_status(deployment_id))


@router.delete("/deployments/{deployment_id}")
def drop_deployment(deployment_id: str, svc: PublishingService = Depends(get_service)):
    return _unwrap(svc.drop_deployment(deployment_id))
