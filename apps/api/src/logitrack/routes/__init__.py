from fastapi import APIRouter

from logitrack.routes import coordinates, jobs

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(jobs.router)
api_router.include_router(coordinates.router)

__all__ = ["api_router"]
