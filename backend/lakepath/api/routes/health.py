"""Health check endpoints."""

from fastapi import APIRouter

from lakepath import __version__
from lakepath.config import settings
from lakepath.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Lightweight connectivity check."""
    return HealthResponse(version=__version__, mode=settings.mode)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
