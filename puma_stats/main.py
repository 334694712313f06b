from fastapi import FastAPI

from puma_stats.api.router import api_router
from puma_stats.core.config import settings

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
