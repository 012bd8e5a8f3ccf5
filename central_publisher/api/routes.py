"""Liveness route for the publisher API."""

from __future__ import annotations

from fastapi import APIRouter

from central_publisher import __version__

router = APIRouter(tags=["health"])


@router.get("/health", summary="Publisher liveness and version")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
