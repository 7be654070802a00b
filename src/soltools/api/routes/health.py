"""Health check endpoint with fetch worker status."""

from typing import Any

from fastapi import APIRouter, Request

from soltools.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Health check endpoint with fetch worker status.

    Returns:
        dict with overall status, version and fetch info.
    """
    settings = get_settings()
    controller = request.app.state.controller

    runtime_ok = controller.runtime.running
    worker_status = controller.worker.get_status()

    return {
        "status": "ok" if runtime_ok else "degraded",
        "version": settings.app_version,
        "fetch": {
            "running": worker_status["running"],
            "transactions": controller.store.snapshot_length(blocking=False),
            "last_outcome": worker_status["last_outcome"],
        },
    }
