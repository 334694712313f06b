from fastapi import APIRouter

from puma_stats.api.endpoints import stats

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(stats.router)
