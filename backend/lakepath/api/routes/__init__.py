"""API route registration."""

from fastapi import APIRouter

from lakepath.api.routes import datalake, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(datalake.router, prefix="/datalake", tags=["datalake"])
