"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """Readiness check endpoint: the store document has been opened."""
    service = request.app.state.service
    if not service.store.is_open:
        return {"status": "starting"}
    return {"status": "ready"}
