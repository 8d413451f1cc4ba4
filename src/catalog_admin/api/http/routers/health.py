"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.catalog_admin.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not touch the managed backend."""
    return {"status": "healthy", "service": "catalog-admin"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness: the managed-service handles exist and are open.

    Returns 200 when ready, 503 otherwise. No request is sent to the
    backend; its availability is the provider's concern.
    """
    app_deps = getattr(request.app.state, "app_dependencies", None)
    config = get_config()

    checks: dict[str, Any] = {
        "admin_allow_list": {
            "status": "healthy" if config.admin.emails else "unhealthy",
            "entries": len(config.admin.emails),
        }
    }
    if app_deps is None:
        checks["clients"] = {"status": "unhealthy", "error": "not initialized"}
    else:
        for name, client in (
            ("service_client", app_deps.service_client),
            ("anon_client", app_deps.anon_client),
        ):
            checks[name] = {"status": "unhealthy" if client.is_closed else "healthy"}

    all_healthy = all(check["status"] == "healthy" for check in checks.values())
    body = {"status": "ready" if all_healthy else "not_ready", "checks": checks}
    if not all_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
