"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.book_catalog.api.http.deps import get_document_store
from src.book_catalog.core.services import DocumentStoreService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness check: 200 OK as long as the process is serving.

    It does not check dependencies.
    """
    return {"status": "healthy", "service": "book-catalog"}


@router.get("/ready", response_model=None)
async def readiness(
    store: DocumentStoreService = Depends(get_document_store),
) -> dict[str, Any] | JSONResponse:
    """Readiness check: 200 if MongoDB answers ping, 503 otherwise."""
    healthy = await store.health_check()
    body = {
        "status": "ready" if healthy else "not_ready",
        "checks": {
            "mongodb": {
                "status": "healthy" if healthy else "unhealthy",
                **store.describe(),
            }
        },
    }
    if not healthy:
        return JSONResponse(status_code=503, content=body)
    return body
