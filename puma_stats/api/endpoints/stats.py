from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from puma_stats.core.exceptions import ControlConnectionError, ParseError
from puma_stats.schemas.status import StatsResponse, StatusSnapshot, WorkerStatus
from puma_stats.services.control_client import puma_client
from puma_stats.services.renderer import aggregate, render

router = APIRouter(prefix="/stats", tags=["stats"])


async def _fetch_snapshot() -> StatusSnapshot:
    try:
        return await puma_client.fetch_snapshot()
    except ControlConnectionError as e:
        raise HTTPException(status_code=503, detail=f"Puma control server connection failed: {e}")
    except ParseError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("", response_model=StatsResponse)
async def get_stats():
    snapshot = await _fetch_snapshot()
    return StatsResponse(workers=list(snapshot.worker_status), totals=aggregate(snapshot))


@router.get("/summary", response_class=PlainTextResponse)
async def get_summary():
    """Same text the ``puma-stats stats`` command prints"""
    snapshot = await _fetch_snapshot()
    return render(snapshot)


@router.get("/workers/{index}", response_model=WorkerStatus)
async def get_worker(index: int):
    snapshot = await _fetch_snapshot()
    for worker in snapshot.worker_status:
        if worker.index == index:
            return worker
    raise HTTPException(status_code=404, detail=f"Worker {index} not found")
