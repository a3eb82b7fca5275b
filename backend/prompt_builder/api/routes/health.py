from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from prompt_builder.core.config import SERVICE_NAME

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Liveness probe.

    Returns 503 during graceful shutdown so the load balancer stops routing traffic.
    """
    if getattr(request.app.state, "shutting_down", False):
        return JSONResponse(
            status_code=503,
            content={"ok": False, "status": "shutting_down", "service": SERVICE_NAME},
        )
    return {"ok": True, "status": "healthy", "service": SERVICE_NAME}
