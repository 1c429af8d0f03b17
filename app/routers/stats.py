from fastapi import APIRouter, Depends, Response, status

from app.dependencies import get_stats_tracker
from app.schemas.stats import SessionCompleted, StatsResponse
from app.services.stats_service import FocusStatsTracker

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(tracker: FocusStatsTracker = Depends(get_stats_tracker)):
    return tracker.stats()


@router.post("/sessions", response_model=StatsResponse, status_code=201)
async def record_session(
    data: SessionCompleted,
    tracker: FocusStatsTracker = Depends(get_stats_tracker),
):
    await tracker.record_session(data)
    return tracker.stats()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset_stats(tracker: FocusStatsTracker = Depends(get_stats_tracker)):
    await tracker.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
